"""네트워크 계층 예외"""


class InvalidURL(ValueError):
    """지원하지 않는 스킴이거나 호스트가 없는 URL"""


class FetchError(Exception):
    """응답 본문을 받아오지 못함 (연결, 타임아웃, 프로토콜 오류)"""
