"""pagewiki widgets."""

from .banner import Banner
from .page_list import PageList
from .picker import PickerModal
from .preview import Preview, load_page_content

__all__ = [
    "Banner",
    "PageList",
    "PickerModal",
    "Preview",
    "load_page_content",
]
