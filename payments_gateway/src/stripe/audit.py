import json
import logging

logger = logging.getLogger(__name__)


def log(event_type: str, payload: dict, status: str = "ok", note: str = ""):
    """Generic audit logger.

    payload can include identifiers like:
    - price_id / price_ids
    - session_id / customer_id / subscription_id
    - event_id / event_type for webhooks
    """
    level = logging.ERROR if status == "error" else logging.INFO
    try:
        logger.log(
            level,
            "stripe_audit %s status=%s payload=%s note=%s",
            event_type,
            status,
            json.dumps(payload, default=str, sort_keys=True),
            note,
        )
    except Exception:
        # No-op on audit failures to avoid impacting requests
        pass
