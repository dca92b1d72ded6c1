import re

from pages.base import BasePage

DAY_TITLES = {
    "MONDAY": "Monday",
    "TUESDAY": "Tuesday",
    "WEDNESDAY": "Wednesday",
    "THURSDAY": "Thursday",
    "FRIDAY": "Friday",
    "SATURDAY": "Saturday",
    "SUNDAY": "Sunday",
}


class DialogPage(BasePage):
    """Modal dialogs for create and edit forms."""

    def __init__(self, page):
        super().__init__(page)
        self.dialog = page.get_by_role("dialog")
        self.title = self.dialog.locator('h1, h2, h3, [class*="title"]').first
        self.name_input = self.dialog.get_by_label(re.compile("name", re.I))
        self.description_input = self.dialog.get_by_label(
            re.compile("description", re.I)
        )
        self.save_button = self.dialog.get_by_role(
            "button", name=re.compile("save|submit|create", re.I)
        )
        self.cancel_button = self.dialog.get_by_role(
            "button", name=re.compile("cancel", re.I)
        )
        self.delete_button = self.dialog.get_by_role(
            "button", name=re.compile("delete", re.I)
        )
        self.close_button = self.dialog.get_by_role(
            "button", name=re.compile("close", re.I)
        )

    def heading(self, pattern):
        return self.dialog.get_by_role("heading", name=re.compile(pattern, re.I))

    def wait_for_open(self):
        self.wait_for_visible(self.dialog)

    def wait_for_close(self):
        self.wait_for_hidden(self.dialog)

    def is_open(self):
        return self.dialog.is_visible()

    def fill_name(self, name):
        self.fill_input(self.name_input, name)

    def replace_name(self, name):
        self.name_input.clear()
        self.name_input.fill(name)

    def fill_description(self, description):
        self.fill_input(self.description_input, description)

    def day_button(self, day):
        title = DAY_TITLES.get(day.upper(), day)
        return self.dialog.locator(f'button[title="{title}"]')

    def toggle_day(self, day):
        self.day_button(day).click()

    def save(self):
        """Submit the form and wait for the dialog to close."""
        self.save_button.click()
        self.wait_for_close()
        self.wait_for_network_idle()

    def cancel(self):
        self.cancel_button.click()
        self.wait_for_close()

    def click_delete(self):
        self.delete_button.click()

    def get_title(self):
        return self.title.text_content() or ""

    def fill_and_save(self, name=None, description=None):
        if name:
            self.fill_name(name)
        if description:
            self.fill_description(description)
        self.save()


class AlertDialogPage(BasePage):
    """Delete confirmation prompt."""

    def __init__(self, page):
        super().__init__(page)
        self.dialog = page.get_by_role("alertdialog")
        self.confirm_button = self.dialog.get_by_role(
            "button", name=re.compile("delete", re.I)
        )
        self.cancel_button = self.dialog.get_by_role(
            "button", name=re.compile("cancel", re.I)
        )

    def text(self, pattern):
        return self.dialog.get_by_text(re.compile(pattern, re.I))

    def confirm_delete(self):
        self.confirm_button.click()
        self.wait_for_hidden(self.dialog)
        self.wait_for_network_idle()

    def cancel(self):
        self.cancel_button.click()
        self.wait_for_hidden(self.dialog)
