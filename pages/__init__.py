"""
Playwright page objects, one per UI region.

Every page object extends BasePage directly and takes the Playwright page in
its constructor.
"""

from pages.base import BasePage
from pages.board import BoardPage
from pages.calendar_view import CalendarPage
from pages.dialog import AlertDialogPage, DialogPage
from pages.pipeline_list import PipelineListPage
from pages.series_list import SeriesListPage
from pages.sidebar import SidebarNav

__all__ = [
    "AlertDialogPage",
    "BasePage",
    "BoardPage",
    "CalendarPage",
    "DialogPage",
    "PipelineListPage",
    "SeriesListPage",
    "SidebarNav",
]
