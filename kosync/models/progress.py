"""Progress model: the latest reading position per (user, document). Not a history."""
from sqlalchemy import Column, Integer, String, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from kosync.db.session import Base


class Progress(Base):
    __tablename__ = "progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    document = Column(String, nullable=False, index=True)  # client-supplied, usually a hash

    progress = Column(String, nullable=False)  # opaque marker, e.g. an xpointer or page number
    percentage = Column(Float, nullable=False)  # not range-checked, owned by the client
    device = Column(String, nullable=False)
    device_id = Column(String, nullable=False)
    timestamp = Column(Integer, nullable=False)  # server time of the write, epoch seconds

    user = relationship("User", back_populates="progress")

    __table_args__ = (
        UniqueConstraint("user_id", "document", name="uq_progress_user_document"),
    )

    def __repr__(self):
        return f"<Progress(user_id={self.user_id}, document='{self.document}', percentage={self.percentage})>"
