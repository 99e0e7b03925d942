# Chrome trace profiling
from .measure_time import MeasureTime, TraceEvent, Tracer, set_thread_name

__all__ = ['MeasureTime', 'TraceEvent', 'Tracer', 'set_thread_name']
