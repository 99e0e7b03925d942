# Core browser functionality (SDL window, compositor)
from .browser import Browser
from .compositor_thread import CompositorData, CompositorThread

__all__ = ['Browser', 'CompositorData', 'CompositorThread']
