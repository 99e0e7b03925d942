"""
로드/래스터 구간 추적 - chrome://tracing 형식 JSON

--trace FILE 을 주었을 때만 Tracer가 켜진다. 꺼져 있으면 MeasureTime은
아무 것도 기록하지 않는다.

    with MeasureTime("parse_html", "parse"):
        parse()

    @MeasureTime.trace("project", "layout")
    def project(): ...
"""
import json
import logging
import threading
import time
from dataclasses import asdict, dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

PROCESS_ID = 1


@dataclass
class TraceEvent:
    name: str
    cat: str
    ph: str  # 'B' 시작, 'E' 끝
    ts: float  # 마이크로초
    tid: int
    pid: int = PROCESS_ID
    args: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        event = asdict(self)
        if not self.args:
            del event["args"]
        return event


class Tracer:
    """프로세스 전체에서 하나를 공유하는 이벤트 수집기"""

    _instance: Optional["Tracer"] = None
    _lock = threading.Lock()

    def __init__(self):
        self.events: List[TraceEvent] = []
        self.thread_names: Dict[int, str] = {}
        self.lock = threading.Lock()
        self.enabled = False
        self.output_file: Optional[str] = None
        self.origin = time.perf_counter()

    @classmethod
    def get(cls) -> "Tracer":
        with cls._lock:
            if cls._instance is None:
                cls._instance = Tracer()
            return cls._instance

    def enable(self, output_file: str):
        self.output_file = output_file
        self.origin = time.perf_counter()
        self.enabled = True

    def record(self, name: str, category: str, phase: str, args: Optional[Dict] = None):
        if not self.enabled:
            return
        ts = (time.perf_counter() - self.origin) * 1_000_000
        event = TraceEvent(name, category, phase, ts, threading.get_ident(), args=dict(args or {}))
        with self.lock:
            self.events.append(event)

    def metadata(self) -> List[Dict[str, Any]]:
        """프로세스/스레드 이름 표시용 'M' 이벤트"""
        names = [("process_name", None, "TactileBrowser")]
        names += [("thread_name", tid, name) for tid, name in self.thread_names.items()]
        result = []
        for kind, tid, name in names:
            entry = {"name": kind, "ph": "M", "pid": PROCESS_ID, "args": {"name": name}}
            if tid is not None:
                entry["tid"] = tid
            result.append(entry)
        return result

    def finish(self):
        """수집을 끝내고 JSON 파일로 저장"""
        if not self.enabled:
            return
        self.enabled = False
        with self.lock:
            events = self.metadata() + [event.to_dict() for event in self.events]
        with open(self.output_file, "w") as f:
            json.dump({"traceEvents": events, "displayTimeUnit": "ms"}, f)
        logger.info("Trace saved to %s (%d events)", self.output_file, len(events))


class MeasureTime:
    """B/E 이벤트 쌍으로 구간을 기록하는 컨텍스트 매니저"""

    def __init__(self, name: str, category: str = "function", args: Optional[Dict] = None):
        self.name = name
        self.category = category
        self.args = args

    def __enter__(self):
        Tracer.get().record(self.name, self.category, "B", self.args)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        Tracer.get().record(self.name, self.category, "E")
        return False

    @staticmethod
    def trace(name: str, category: str = "function") -> Callable:
        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(*args, **kwargs):
                with MeasureTime(name, category):
                    return func(*args, **kwargs)
            return wrapper
        return decorator


def set_thread_name(name: str):
    """트레이스에 현재 스레드 이름을 남김"""
    Tracer.get().thread_names[threading.get_ident()] = name
