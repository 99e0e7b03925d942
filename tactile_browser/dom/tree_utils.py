"""DOM Tree utilities

깊게 중첩된 문서에서도 재귀 한도에 걸리지 않도록 모두 명시적 스택으로 순회한다.
"""
from typing import List, Optional

from .element import Element
from .text import Text

# 텍스트 수집에서 제외하는 요소
RAW_TEXT_TAGS = ("script", "style")


def tree_to_list(tree, result_list):
    """DOM 트리를 문서 순서의 flat list로 변환"""
    stack = [tree]
    while stack:
        node = stack.pop()
        result_list.append(node)
        stack.extend(reversed(node.children))
    return result_list


def find_first(node, tag: str) -> Optional[Element]:
    """문서 순서상 node 아래에서 처음 나오는 tag 요소 (node 자신 포함)"""
    stack = [node]
    while stack:
        candidate = stack.pop()
        if isinstance(candidate, Element):
            if candidate.tag == tag:
                return candidate
            stack.extend(reversed(candidate.children))
    return None


def text_content(node) -> str:
    """node와 모든 자손 텍스트 노드를 이어 붙인 문자열"""
    parts: List[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Text):
            parts.append(current.text)
        elif current.tag not in RAW_TEXT_TAGS:
            stack.extend(reversed(current.children))
    return "".join(parts)


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())
