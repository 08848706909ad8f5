"""Documentation cache and session state."""

from docbot.session.store import BotContext, DocSession, DocumentStore, SessionStore

__all__ = ["BotContext", "DocSession", "DocumentStore", "SessionStore"]
