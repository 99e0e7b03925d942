from ..common.constants import MAX_TITLE_LENGTH, PLACEHOLDER_TITLE
from ..dom import collapse_whitespace, find_first, text_content


def extract_title(document, max_length: int = MAX_TITLE_LENGTH) -> str:
    """문서의 첫 <title> 텍스트, 없거나 비어 있으면 PLACEHOLDER_TITLE"""
    title = find_first(document, "title")
    if title is None:
        return PLACEHOLDER_TITLE
    text = collapse_whitespace(text_content(title))
    if not text:
        return PLACEHOLDER_TITLE
    return text[:max_length]
