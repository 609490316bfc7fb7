from kosync.services.accounts import register_user, verify_credentials
from kosync.services.progress_store import get_latest_progress, upsert_progress

__all__ = ["register_user", "verify_credentials", "get_latest_progress", "upsert_progress"]
