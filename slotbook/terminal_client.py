#!/usr/bin/env python3
"""Terminal front-end for the slot booking API.

Usage:
    slotbook                      # remote API with local fallback
    slotbook --mode local         # no server needed
    slotbook --user-id 42         # identity without a Telegram host

Mirrors the mini-app screens:
- "Записаться" tab: day selector + slot cards
- "Мои записи" tab: personal bookings
"""
import argparse
import sys
from typing import Callable, List, Optional

from slotbook import config
from slotbook.api.models import SlotView
from slotbook.calendar_days import Day, today, upcoming_days, days_until, format_date
from slotbook.circuit_breaker import CircuitBreakerOpen
from slotbook.client import BookingError, create_client
from slotbook.http_client import CONNECTION_ERRORS
from slotbook.identity import HostIdentity
from slotbook.slots import SlotStatus

NO_ID_ALERT = "Не удалось получить ваш ID из Telegram."
BOOK_FAILED_ALERT = "Слот уже занят или произошла ошибка."
LOAD_FAILED_ALERT = "Не удалось загрузить слоты."

BOOKING_TAB = "booking"
PROFILE_TAB = "profile"


# ANSI color codes
class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GRAY = '\033[90m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def colored(text: str, color: str, enabled: bool = True) -> str:
    return f"{color}{text}{Colors.RESET}" if enabled else text


def render_slot_card(slot: SlotView, loading: bool = False) -> str:
    """One slot as a card label: time, suffix for taken slots, call to action."""
    label = slot.time
    if slot.status == SlotStatus.MINE:
        label += " (моя запись)"
    elif slot.status == SlotStatus.BOOKED:
        label += " (занят)"

    if loading:
        return f"{label} · Бронируем..."
    if slot.status == SlotStatus.FREE:
        return f"{label} · Записаться"
    return label


def render_day_selector(days: List[Day], selected: str) -> str:
    parts = []
    for i, d in enumerate(days, 1):
        text = f"{i}) {d.weekday} {d.label}"
        parts.append(f"[{text}]" if d.value == selected else f" {text} ")
    return "  ".join(parts)


def render_profile(bookings: List[SlotView]) -> str:
    if not bookings:
        return "У вас пока нет записей"

    cards = []
    for b in bookings:
        cards.append(
            f"Дата и время: {format_date(b.date)}, {b.time}\n"
            f"Мастер: {b.master_name}"
        )
    return "\n\n".join(cards)


class BookingApp:
    """
    State and actions of the booking screen.

    Rendering is separate from I/O so the app can be driven by tests.
    """

    def __init__(self, client, identity: HostIdentity, days: Optional[List[Day]] = None,
                 alert: Optional[Callable[[str], None]] = None):
        self.client = client
        self.user_id = identity.user_id
        self.active_tab = BOOKING_TAB
        self.days = days if days is not None else upcoming_days(days_until())
        self.selected_date = self.days[0].value if self.days else today()
        self.slots: List[SlotView] = []
        self.my_bookings: List[SlotView] = []
        self.loading_slots = False
        self.booking_loading: Optional[str] = None
        self.alert = alert or (lambda message: print(colored(f"⚠️  {message}", Colors.YELLOW)))

    def load_slots(self, slot_date: Optional[str] = None):
        slot_date = slot_date or self.selected_date
        self.loading_slots = True
        try:
            self.slots = self.client.get_slots(slot_date, self.user_id)
        finally:
            self.loading_slots = False

    def load_my_bookings(self):
        if not self.user_id:
            return
        try:
            self.my_bookings = self.client.my_bookings(self.user_id)
        except (BookingError, CircuitBreakerOpen) + CONNECTION_ERRORS:
            # Profile keeps the last known list
            pass

    def select_day(self, index: int):
        """Select day by 1-based index and reload its slots."""
        if not 1 <= index <= len(self.days):
            raise IndexError(f"No day #{index}")
        self.selected_date = self.days[index - 1].value
        self.load_slots()

    def set_tab(self, tab: str):
        self.active_tab = tab
        if tab == PROFILE_TAB and self.user_id:
            self.load_my_bookings()

    def handle_book(self, slot_id: str) -> bool:
        """
        Book slot_id for the current user, then refresh slots and bookings.

        Returns:
            True if booked, False if an alert was shown instead
        """
        if not self.user_id:
            self.alert(NO_ID_ALERT)
            return False

        self.booking_loading = slot_id
        try:
            try:
                self.client.book(slot_id, self.user_id)
            except BookingError as e:
                self.alert(e.message or BOOK_FAILED_ALERT)
                return False
            except (CircuitBreakerOpen,) + CONNECTION_ERRORS:
                self.alert(BOOK_FAILED_ALERT)
                return False

            self.load_slots()
            self.load_my_bookings()
            return True
        finally:
            self.booking_loading = None

    def book_by_index(self, index: int) -> bool:
        """Book the n-th (1-based) card of the current day if it is free."""
        if not 1 <= index <= len(self.slots):
            raise IndexError(f"No slot #{index}")
        slot = self.slots[index - 1]
        if slot.status != SlotStatus.FREE:
            # Disabled card
            return False
        return self.handle_book(slot.id)

    def render(self, color: bool = False) -> str:
        lines = [
            colored("Запись к мастеру", Colors.BOLD, color),
            "Выберите удобный день и время",
            "",
        ]

        tabs = [("Записаться", BOOKING_TAB), ("Мои записи", PROFILE_TAB)]
        lines.append("  ".join(
            f"[{title}]" if tab == self.active_tab else f" {title} "
            for title, tab in tabs
        ))
        lines.append("")

        if self.active_tab == PROFILE_TAB:
            lines.append(render_profile(self.my_bookings))
            return "\n".join(lines)

        lines.append(render_day_selector(self.days, self.selected_date))
        lines.append("")

        if self.loading_slots:
            lines.append("Загружаем слоты...")
        elif not self.slots:
            lines.append("Нет слотов на этот день")
        else:
            for i, slot in enumerate(self.slots, 1):
                card = render_slot_card(slot, loading=self.booking_loading == slot.id)
                if slot.status == SlotStatus.FREE:
                    card = colored(card, Colors.GREEN, color)
                elif slot.status == SlotStatus.MINE:
                    card = colored(card, Colors.BLUE, color)
                else:
                    card = colored(card, Colors.GRAY, color)
                lines.append(f"  {i}. {card}")

        return "\n".join(lines)


def print_help():
    print("\nCommands:")
    print("  d <n>   - Select day n")
    print("  b <n>   - Book slot n")
    print("  s       - Booking tab")
    print("  p       - My bookings tab")
    print("  q       - Quit")


def run(app: BookingApp, read: Callable[[str], str] = input):
    """Interactive loop until 'q' or EOF."""
    try:
        app.load_slots()
    except (BookingError, CircuitBreakerOpen) + CONNECTION_ERRORS:
        app.alert(LOAD_FAILED_ALERT)

    while True:
        print("\n" + app.render(color=sys.stdout.isatty()))
        print_help()
        try:
            command = read("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not command:
            continue
        if command in ("q", "/quit", "/exit"):
            break

        name, _, arg = command.partition(" ")
        try:
            if name == "s":
                app.set_tab(BOOKING_TAB)
            elif name == "p":
                app.set_tab(PROFILE_TAB)
            elif name == "d":
                app.select_day(int(arg))
            elif name == "b":
                app.book_by_index(int(arg))
            else:
                app.alert(f"Unknown command: {command}")
        except (ValueError, IndexError) as e:
            app.alert(str(e))
        except (BookingError, CircuitBreakerOpen) + CONNECTION_ERRORS:
            app.alert(LOAD_FAILED_ALERT)


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Slot booking terminal client")
    parser.add_argument("--mode", default=config.CLIENT_MODE, choices=["remote", "local", "auto"])
    parser.add_argument("--base-url", default=config.API_BASE_URL)
    parser.add_argument("--user-id", default=None)
    parser.add_argument("--init-data", default=None, help="Telegram WebApp initData")
    args = parser.parse_args(argv)

    identity = HostIdentity.resolve(user_id=args.user_id, init_data=args.init_data)
    if not identity.can_book:
        print(colored("ℹ️  No user id: booking is disabled.", Colors.YELLOW))

    app = BookingApp(create_client(args.mode, args.base_url), identity)
    run(app)


if __name__ == "__main__":
    main()
