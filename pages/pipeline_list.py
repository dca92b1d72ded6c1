import re

from pages.base import BasePage

CARD_SELECTORS = ('[data-testid="pipeline-card"]', ".pipeline-card", ".pipeline-item")


class PipelineListPage(BasePage):
    """Pipeline list and its CRUD controls."""

    def __init__(self, page):
        super().__init__(page)
        self.create_button = page.get_by_role(
            "button", name=re.compile("create|add|new", re.I)
        )
        self.pipeline_cards = page.locator(", ".join(CARD_SELECTORS))
        self.search_input = page.get_by_placeholder(re.compile("search", re.I))

    def goto(self):
        self.page.goto("/pipelines")
        self.wait_for_network_idle()

    def click_create(self):
        self.create_button.click()

    def pipeline_by_name(self, name):
        return self.page.locator(
            ", ".join(f'{selector}:has-text("{name}")' for selector in CARD_SELECTORS)
        )

    def select_pipeline(self, name):
        self.click_and_wait(self.pipeline_by_name(name))

    def click_edit(self, name):
        self.pipeline_by_name(name).get_by_role(
            "button", name=re.compile("edit", re.I)
        ).click()

    def click_delete(self, name):
        self.pipeline_by_name(name).get_by_role(
            "button", name=re.compile("delete", re.I)
        ).click()

    def pipeline_count(self):
        return self.pipeline_cards.count()

    def pipeline_exists(self, name):
        return self.pipeline_by_name(name).is_visible()
