from .paginated_list import PaginatedList
from .status_bar import StatusBar
from .title_bar import TitleBar

__all__ = ["PaginatedList", "StatusBar", "TitleBar"]
