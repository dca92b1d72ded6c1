"""Base page object with the wait helpers every region shares."""

DEFAULT_TIMEOUT = 5000


class BasePage:
    def __init__(self, page):
        self.page = page

    def wait_for_network_idle(self, timeout=DEFAULT_TIMEOUT):
        """Wait until there are no pending network requests."""
        self.page.wait_for_load_state("networkidle", timeout=timeout)

    def wait_for_visible(self, locator, timeout=DEFAULT_TIMEOUT):
        locator.wait_for(state="visible", timeout=timeout)

    def wait_for_hidden(self, locator, timeout=DEFAULT_TIMEOUT):
        locator.wait_for(state="hidden", timeout=timeout)

    def click_and_wait(self, locator):
        locator.click()
        self.wait_for_network_idle()

    def fill_input(self, locator, value):
        """Fill an input and blur it so validation runs."""
        locator.fill(value)
        locator.blur()

    def toast_message(self):
        """Text of the visible toast/notification, or None."""
        toast = self.page.locator('[role="alert"], .toast, .notification')
        if toast.is_visible():
            return toast.text_content()
        return None
