from .orchestrator import AuthOrchestrator, LoginResult, SignupResult, orchestrated

__all__ = ["AuthOrchestrator", "LoginResult", "SignupResult", "orchestrated"]
