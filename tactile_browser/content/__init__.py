# Content layer - tabs, session and page loading
from .tab import Tab
from .title import extract_title
from .load_pipeline import LoadPipeline
from .session import Session

__all__ = ['Tab', 'extract_title', 'LoadPipeline', 'Session']
