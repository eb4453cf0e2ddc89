# repochat/session/__init__.py
from repochat.session.ids import new_chat_id, new_ids, new_session_id
from repochat.session.manager import GREETING, SessionManager

__all__ = ["GREETING", "SessionManager", "new_chat_id", "new_ids", "new_session_id"]
