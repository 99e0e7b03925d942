# DOM (Document Object Model) components
from .element import Element
from .text import Text
from .html_parser import HTMLParser, ParseError, decode_body, parse_html
from .tree_utils import (
    collapse_whitespace,
    find_first,
    text_content,
    tree_to_list,
)

__all__ = [
    'Element',
    'Text',
    'HTMLParser',
    'ParseError',
    'decode_body',
    'parse_html',
    'collapse_whitespace',
    'find_first',
    'text_content',
    'tree_to_list',
]
