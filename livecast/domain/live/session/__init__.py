from .session_orchestrator import SessionOrchestrator

__all__ = ["SessionOrchestrator"]
