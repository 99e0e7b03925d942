"""
로드 워커에서 UI 스레드로 전달되는 페이지 로드 결과
"""
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..common.constants import PLACEHOLDER_TITLE

if TYPE_CHECKING:
    from ..dom import Element


class LoadOutcome(Enum):
    LOADED = "loaded"
    INVALID_URL = "invalid_url"
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"


@dataclass
class LoadCommit:
    """fetch/parse/title 단계까지 끝난 로드 결과 (projection 전)"""

    tab_id: int
    # 요청 당시 탭의 generation, 현재 값과 다르면 버려진다
    generation: int
    url: str
    outcome: LoadOutcome
    document: Optional["Element"] = None
    title: str = PLACEHOLDER_TITLE
    error: Optional[str] = None
