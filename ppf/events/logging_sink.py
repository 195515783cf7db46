"""Event sink that writes every oracle event to the log."""
import logging

from ..models import OperatorChanged, OperatorOwnerChanged, OracleEvent, RateUpdated

logger = logging.getLogger(__name__)


class LoggingEventSink:
    """Publish oracle events as log records."""

    def emit(self, event: OracleEvent) -> None:
        if isinstance(event, RateUpdated):
            logger.info(
                "SetRate %s/%s rate=%d when=%d",
                event.base,
                event.quote,
                event.rate,
                event.timestamp,
            )
        elif isinstance(event, OperatorChanged):
            logger.info("SetOperator %s", event.operator)
        elif isinstance(event, OperatorOwnerChanged):
            logger.info("SetOperatorOwner %s", event.operator_owner)
