# Tactile Browser Package
# A minimal tabbed web-page viewer

__version__ = "0.1.0"

# SDL을 쓰는 core.Browser는 여기서 가져오지 않음 (필요할 때 tactile_browser.core에서)
from .content import LoadPipeline, Session, Tab
from .ui import Chrome, FocusRing, InputCoordinator

__all__ = ['LoadPipeline', 'Session', 'Tab', 'Chrome', 'FocusRing', 'InputCoordinator']
