import re

from playwright.sync_api import expect

from pages.base import BasePage


class SidebarNav(BasePage):
    """Sidebar navigation.

    URL structure: /pipelines/<id>/series | /board | /calendar
    """

    def __init__(self, page):
        super().__init__(page)
        self.sidebar = page.locator("aside")
        self.calendar_link = page.get_by_role(
            "link", name=re.compile("content calendar", re.I)
        )
        self.board_link = page.get_by_role("link", name=re.compile("board view", re.I))
        self.new_pipeline_button = page.locator('button:has-text("New Pipeline")')

    def go_to_calendar(self):
        self.click_and_wait(self.calendar_link)
        expect(self.page).to_have_url(re.compile(r".*calendar.*", re.I))

    def go_to_board(self):
        self.click_and_wait(self.board_link)
        expect(self.page).to_have_url(re.compile(r".*board.*", re.I))

    def go_to_pipelines(self):
        """Open the first pipeline listed in the sidebar."""
        link = self.sidebar.locator('a[href*="/pipelines/"]').first
        self.click_and_wait(link)
        expect(self.page).to_have_url(re.compile(r".*/pipelines/\d+/series.*", re.I))

    def go_to_pipeline(self, name):
        self.click_and_wait(self.pipeline_link(name))
        expect(self.page).to_have_url(re.compile(r".*/pipelines/\d+/series.*", re.I))

    def pipeline_link(self, name):
        return self.page.get_by_role("link", name=name, exact=True)

    def click_new_pipeline(self):
        self.new_pipeline_button.click()

    def open_edit_pipeline(self, name):
        """Hover a pipeline link to reveal its pencil button and click it."""
        link = self.pipeline_link(name)
        link.hover()
        link.get_by_role("button", name=re.compile("edit", re.I)).click()

    def is_visible(self):
        return self.sidebar.is_visible()

    def nav_links(self):
        links = self.sidebar.locator("a").all_text_contents()
        return [text for text in links if text.strip()]

    def has_pipeline(self, name):
        return self.pipeline_link(name).is_visible()
