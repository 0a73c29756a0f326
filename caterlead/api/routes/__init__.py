from .leads import router as leads_router
from .outreach import router as outreach_router
from .workflows import router as workflows_router

__all__ = ["leads_router", "outreach_router", "workflows_router"]
