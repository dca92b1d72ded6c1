from pages.base import BasePage

CARD_SELECTOR = '[data-testid="kanban-card"], .kanban-card, .episode-card'


class BoardPage(BasePage):
    """Kanban board of episodes grouped by status."""

    def __init__(self, page):
        super().__init__(page)
        self.board = page.locator('[data-testid="kanban-board"], .kanban-board, .board')
        self.columns = page.locator(
            '[data-testid="kanban-column"], .kanban-column, .board-column'
        )
        self.cards = page.locator(
            '[data-testid="kanban-card"], .kanban-card, .board-card, .episode-card'
        )

    def goto(self):
        self.page.goto("/board")
        self.wait_for_network_idle()

    def column(self, status):
        return self.page.locator(
            f'[data-testid="kanban-column-{status.lower()}"], '
            f'[data-status="{status}"], '
            f'.kanban-column:has-text("{status}")'
        )

    def card(self, title):
        return self.page.locator(
            f'[data-testid="kanban-card"]:has-text("{title}"), '
            f'.kanban-card:has-text("{title}"), '
            f'.episode-card:has-text("{title}")'
        )

    def cards_in_column(self, status):
        return self.column(status).locator(CARD_SELECTOR)

    def drag_card_to_column(self, title, status):
        self.card(title).drag_to(self.column(status))
        self.wait_for_network_idle()

    def click_card(self, title):
        self.click_and_wait(self.card(title))

    def column_names(self):
        headers = self.columns.locator('h2, h3, [class*="header"], [class*="title"]')
        return headers.all_text_contents()

    def card_count_in_column(self, status):
        return self.cards_in_column(status).count()

    def card_exists(self, title):
        return self.card(title).is_visible()
