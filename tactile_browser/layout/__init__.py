# Document -> view projection
from .view_block import BlockKind, ViewBlock
from .projector import ACCEPTED_TAGS, block_style, project

__all__ = [
    'BlockKind',
    'ViewBlock',
    'ACCEPTED_TAGS',
    'block_style',
    'project',
]
