"""투영 결과의 단위 블록"""
from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LINK = "link"
    GENERIC = "generic"


@dataclass
class ViewBlock:
    """body 직계 자식 하나에서 나온 텍스트 블록"""

    text: str
    kind: BlockKind
    # 문서 순회 순서 (0부터)
    order: int
    tag: str = ""
    # 컨테이너 안에서의 세로 위치와 높이
    y: float = 0.0
    height: float = 0.0
