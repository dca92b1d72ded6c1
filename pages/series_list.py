import re

from pages.base import BasePage


class SeriesListPage(BasePage):
    """Series list at /pipelines/<pipeline id>/series."""

    def __init__(self, page):
        super().__init__(page)
        # Shown once at least one series exists
        self.new_series_button = page.get_by_role(
            "button", name=re.compile("new series", re.I)
        )
        # Shown in the empty state
        self.create_first_series_button = page.get_by_role(
            "button", name=re.compile("create your first series", re.I)
        )
        self.series_grid = page.locator(".grid")
        self.empty_state = page.get_by_text(re.compile("no series yet", re.I))

    def goto(self, pipeline_id):
        self.page.goto(f"/pipelines/{pipeline_id}/series")
        self.wait_for_network_idle()

    def click_new_series(self):
        """Open the create dialog from whichever button the page shows."""
        if self.create_first_series_button.is_visible():
            self.create_first_series_button.click()
        else:
            self.new_series_button.click()

    def series_card(self, name):
        # Each card is a link wrapping the card body
        return self.page.locator("a").filter(has_text=name).first

    def all_series_cards(self, name):
        return self.page.locator("a").filter(has_text=name)

    def series_names(self):
        titles = self.page.locator('[class*="CardTitle"], h3')
        names = []
        for i in range(titles.count()):
            text = titles.nth(i).text_content()
            if text:
                names.append(text.strip())
        return names

    def click_series(self, name):
        self.click_and_wait(self.series_card(name))

    def open_edit_dialog(self, name):
        """Hover a card and click its edit button (only shown on hover)."""
        card = self.series_card(name)
        card.hover()
        card.locator('button[title="Edit series"]').click()

    def has_series(self, name):
        return self.series_card(name).is_visible()

    def publish_days_badge(self, name):
        badge = self.series_card(name).locator('.rounded-full, [class*="badge"]').first
        return badge.text_content() or ""

    def episode_count(self, name):
        count = self.series_card(name).get_by_text(re.compile(r"\d+ episode", re.I))
        return count.text_content() or ""
