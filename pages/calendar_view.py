import re

from pages.base import BasePage


class CalendarPage(BasePage):
    """Content calendar with month navigation and draggable events."""

    def __init__(self, page):
        super().__init__(page)
        self.calendar = page.locator('[data-testid="calendar"], .calendar, .fc')
        self.prev_month_button = page.get_by_role(
            "button", name=re.compile("prev|back|←", re.I)
        )
        self.next_month_button = page.get_by_role(
            "button", name=re.compile("next|forward|→", re.I)
        )
        self.today_button = page.get_by_role("button", name=re.compile("today", re.I))
        self.month_title = page.locator(
            '[data-testid="calendar-title"], .fc-toolbar-title, .calendar-title'
        )
        self.events = page.locator(
            '[data-testid="calendar-event"], .fc-event, .calendar-event'
        )

    def goto(self):
        self.page.goto("/calendar")
        self.wait_for_network_idle()

    def previous_month(self):
        self.click_and_wait(self.prev_month_button)

    def next_month(self):
        self.click_and_wait(self.next_month_button)

    def go_to_today(self):
        self.click_and_wait(self.today_button)

    def get_month_title(self):
        return self.month_title.text_content() or ""

    def event(self, title):
        return self.page.locator(
            f'[data-testid="calendar-event"]:has-text("{title}"), '
            f'.fc-event:has-text("{title}"), '
            f'.calendar-event:has-text("{title}")'
        )

    def date_cell(self, date):
        """Cell for an ISO date (YYYY-MM-DD)."""
        return self.page.locator(f'[data-date="{date}"]')

    def click_event(self, title):
        self.click_and_wait(self.event(title))

    def drag_event_to_date(self, title, date):
        self.event(title).drag_to(self.date_cell(date))
        self.wait_for_network_idle()

    def event_titles(self):
        return self.events.all_text_contents()

    def event_count(self):
        return self.events.count()

    def event_exists(self, title):
        return self.event(title).is_visible()

    def click_date(self, date):
        self.click_and_wait(self.date_cell(date))
