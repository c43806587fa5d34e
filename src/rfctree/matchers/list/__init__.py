"""List parsing subpackage.

Architecture:
List parsing is split into focused modules:
- types: ItemStart, the detected-but-unconsumed item
- marker: Bullet marker detection and the marker/content gap
- definition: Definition term detection (inline, stacked, wrapped)
- blank_line: Separator runs inside and between items
- core: ListMatcher, item and list parsing

"""

from rfctree.matchers.list.core import ListMatcher, detect_item_start, parse_list
from rfctree.matchers.list.marker import marker_gap, min_gap

__all__ = ["ListMatcher", "detect_item_start", "marker_gap", "min_gap", "parse_list"]
