"""
Form behaviour tracking.

Events go to the application log only; there is no analytics backend.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger("form_analytics")


def track(action: str, step: Optional[int] = None, **data: Any) -> Dict[str, Any]:
    """Record a form event such as step_forward, draft_restored or error."""
    event = {
        "action": action,
        "step": step,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **data,
    }
    logger.info("Form analytics: %s %s", action, event)
    return event
