"""
DOM -> View 투영

body의 직계 자식만 문서 순서대로 훑어 허용된 태그(p, h1-h3, a, div)의
텍스트를 라벨로 쌓는다. 누적 높이가 max_height를 넘으면 멈춘다.
중첩 구조, 인라인 서식, 이미지, 표는 버린다.
"""
import logging
from typing import List, Optional

from ..common.constants import (
    BLOCK_GAP,
    HEADING_COLOR,
    HSTEP,
    LAYOUT_CEILING,
    LINK_COLOR,
    MAX_BLOCK_TEXT_LENGTH,
    TEXT_COLOR,
    VSTEP,
)
from ..dom import Element, collapse_whitespace, find_first, text_content
from ..profiling import MeasureTime
from ..rendering import get_font
from ..ui.widgets import Label, ScrollContainer
from .view_block import BlockKind, ViewBlock

logger = logging.getLogger(__name__)

ACCEPTED_TAGS = {
    "h1": BlockKind.HEADING,
    "h2": BlockKind.HEADING,
    "h3": BlockKind.HEADING,
    "p": BlockKind.PARAGRAPH,
    "a": BlockKind.LINK,
    "div": BlockKind.GENERIC,
}
HEADING_SIZES = {"h1": 22, "h2": 18, "h3": 16}
BODY_SIZE = 14


def block_style(tag: str, kind: BlockKind):
    """블록 종류별 (font, color)"""
    if kind == BlockKind.HEADING:
        return get_font(HEADING_SIZES[tag], "bold", "roman"), HEADING_COLOR
    if kind == BlockKind.LINK:
        return get_font(BODY_SIZE, "normal", "roman"), LINK_COLOR
    return get_font(BODY_SIZE, "normal", "roman"), TEXT_COLOR


@MeasureTime.trace("project", "layout")
def project(
    document: Element,
    container: ScrollContainer,
    width_budget: Optional[float] = None,
    max_height: float = LAYOUT_CEILING,
    gap: float = BLOCK_GAP,
    max_text_length: int = MAX_BLOCK_TEXT_LENGTH,
) -> List[ViewBlock]:
    if width_budget is None:
        width_budget = container.width - 2 * HSTEP

    blocks: List[ViewBlock] = []
    body = find_first(document, "body")
    if body is None:
        return blocks

    offset = 0.0
    for child in body.children:
        if offset > max_height:
            logger.debug("layout ceiling %s reached after %d blocks", max_height, len(blocks))
            break
        if not isinstance(child, Element) or child.tag not in ACCEPTED_TAGS:
            continue
        text = collapse_whitespace(text_content(child))
        if not text:
            continue
        text = text[:max_text_length]

        kind = ACCEPTED_TAGS[child.tag]
        font, color = block_style(child.tag, kind)
        label = container.add(Label(text, HSTEP, VSTEP + offset, width_budget, font, color))
        blocks.append(ViewBlock(text, kind, len(blocks), child.tag, offset, label.height))
        offset += label.height + gap

    return blocks
