"""Result of handing an email to the transport."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmailDispatchResult:
    """Attributes:
        message_id: Transport-assigned identifier, if any.
        preview_url: Link to a rendered copy of the message. Test transports
            may provide one; real SMTP delivery never does.
    """

    message_id: Optional[str] = None
    preview_url: Optional[str] = None
