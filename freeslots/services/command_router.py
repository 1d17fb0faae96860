"""
Minimal command router for the chat front-end.

Maps an incoming chat event to one of three commands and builds the reply
the messaging layer should deliver. Nothing here talks to a chat API; the
bot process sends ``BotReply.text`` with ``BotReply.keyboard`` and deletes
``BotReply.delete_message_id``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

import pendulum
from pendulum import DateTime

from ..domain.exceptions import AvailabilityError
from .availability_service import AvailabilityService

logger = logging.getLogger(__name__)

START_COMMAND = "/start"
RELOAD_CALLBACK = "reload"
BOOK_CALLBACK = "write"

MENU_MESSAGES: Dict[str, Dict[str, str]] = {
    "ru": {
        "header": "Свободные записи на данный момент ({timestamp})",
        "failure": "Не удалось получить свободные слоты. Попробуйте позже.",
        "reload": "Перезагрузить",
        "book": "Записаться",
    },
    "en": {
        "header": "Free appointments right now ({timestamp})",
        "failure": "Could not compute availability. Please try again later.",
        "reload": "Reload",
        "book": "Book",
    },
}


class EventKind(str, Enum):
    MESSAGE = "message"
    CALLBACK = "callback"


class Command(str, Enum):
    SHOW_MENU = "show_menu"
    RELOAD = "reload"
    DISMISS = "dismiss"


@dataclass(frozen=True)
class IncomingEvent:
    """A text message or a button callback from a chat."""
    kind: EventKind
    payload: str
    chat_id: int
    message_id: int


@dataclass(frozen=True)
class InlineButton:
    text: str
    callback_data: str | None = None
    url: str | None = None


@dataclass
class BotReply:
    """What the messaging layer should do in response to an event."""
    command: Command
    chat_id: int
    delete_message_id: int | None = None
    text: str | None = None
    keyboard: List[List[InlineButton]] = field(default_factory=list)
    failed: bool = False


def route(event: IncomingEvent) -> Command:
    """
    Decide which command an event maps to.

    ``/start`` shows the menu, the ``reload`` button refreshes it, anything
    else is dismissed.
    """
    if event.kind is EventKind.MESSAGE and event.payload == START_COMMAND:
        return Command.SHOW_MENU
    if event.kind is EventKind.CALLBACK and event.payload == RELOAD_CALLBACK:
        return Command.RELOAD
    return Command.DISMISS


class CommandRouter:
    """
    Turns chat events into replies backed by the availability service.
    """

    def __init__(
        self,
        availability_service: AvailabilityService,
        owner_contact_url: str | None = None,
    ) -> None:
        self._service = availability_service
        self._owner_contact_url = owner_contact_url

        config = availability_service.config
        self._timezone = config.timezone
        self._messages = MENU_MESSAGES[config.locale]

    def handle(self, event: IncomingEvent, now: DateTime | None = None) -> BotReply:
        """
        Build the reply for an event.

        Messages are always scheduled for deletion. For callbacks only a
        reload deletes the previous menu; other buttons leave it in place.
        """
        command = route(event)
        logger.debug("Routing %s event to %s", event.kind.value, command.value)

        if command is Command.DISMISS:
            return BotReply(
                command=command,
                chat_id=event.chat_id,
                delete_message_id=event.message_id if event.kind is EventKind.MESSAGE else None,
            )

        reply = self.build_menu(event.chat_id, now=now)
        reply.command = command
        reply.delete_message_id = event.message_id
        return reply

    def build_menu(self, chat_id: int, now: DateTime | None = None) -> BotReply:
        """
        Compute a fresh report and wrap it into the main menu.

        Feed failures become a generic notice; the cause is only logged.
        """
        now = pendulum.now(self._timezone) if now is None else now.in_timezone(self._timezone)
        header = self._messages["header"].format(timestamp=now.format("DD.MM HH:mm"))

        try:
            report = self._service.compute_availability_report(now=now)
        except AvailabilityError:
            logger.exception("Availability report failed")
            return BotReply(
                command=Command.SHOW_MENU,
                chat_id=chat_id,
                text=self._messages["failure"],
                keyboard=self.build_keyboard(),
                failed=True,
            )

        return BotReply(
            command=Command.SHOW_MENU,
            chat_id=chat_id,
            text=f"{header}\n\n{report}",
            keyboard=self.build_keyboard(),
        )

    def build_keyboard(self) -> List[List[InlineButton]]:
        """One row with the reload button, one with the booking link if configured."""
        rows = [[InlineButton(text=self._messages["reload"], callback_data=RELOAD_CALLBACK)]]

        if self._owner_contact_url:
            rows.append([
                InlineButton(
                    text=self._messages["book"],
                    callback_data=BOOK_CALLBACK,
                    url=self._owner_contact_url,
                )
            ])

        return rows
