from dataclasses import dataclass
from typing import Any, Dict, Optional

# `year` query value that switches listing into the merged "2000 and below" mode
YEAR_RANGE_SENTINEL = "2000_and_less"
ALL_YEARS = "all"


@dataclass
class ListingPage:
    page: int
    payload: Optional[Dict[str, Any]]


@dataclass
class Person:
    name: Optional[str]
    image: Optional[str]
    id: Optional[str]


@dataclass
class SubtitleArchive:
    content: bytes
    content_type: Optional[str]
    content_disposition: Optional[str]
