import contextvars
import logging
import sys
from typing import Any, Dict, Optional

player_ctx: contextvars.ContextVar[Optional[Dict[str, Any]]] = contextvars.ContextVar("player_ctx", default=None)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(steamid)s/%(slot)s] %(message)s"


class PlayerContextFilter(logging.Filter):
    """
    Logging filter to inject the current player's steamid and slot into log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = player_ctx.get() or {}
        if not hasattr(record, "steamid"):
            record.steamid = ctx.get("steamid", "-")
        if not hasattr(record, "slot"):
            record.slot = ctx.get("slot", "-")
        return True


def fmt_ctx(ctx: Dict[str, Any]) -> str:
    """Return a deterministic key=value string used in log messages."""
    return " ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)


def configure_logging(level: int = logging.INFO) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(PlayerContextFilter())
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)
