"""DOM Text node"""


class Text:
    """텍스트 콘텐츠를 나타내는 DOM 노드 (문자 참조는 이미 디코딩됨)"""

    def __init__(self, text, parent):
        self.text = text
        self.children = []
        self.parent = parent

    def __repr__(self) -> str:
        return repr(self.text)
