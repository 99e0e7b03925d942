"""주소창 편집 상태 - 입력 중인 텍스트와 커서"""
from ..common.constants import MAX_URL_LENGTH


class TextBuffer:
    def __init__(self, text: str = "", max_length: int = MAX_URL_LENGTH):
        self.max_length = max_length
        self.text = ""
        self.cursor = 0
        self.set_text(text)

    def set_text(self, text: str):
        self.text = text[:self.max_length]
        self.cursor = len(self.text)

    def clear(self):
        self.set_text("")

    def insert(self, char: str) -> bool:
        if len(self.text) + len(char) > self.max_length:
            return False
        self.text = self.text[:self.cursor] + char + self.text[self.cursor:]
        self.cursor += len(char)
        return True

    def backspace(self) -> bool:
        """커서 앞 한 글자 삭제"""
        if self.cursor == 0:
            return False
        self.text = self.text[:self.cursor - 1] + self.text[self.cursor:]
        self.cursor -= 1
        return True

    def delete(self) -> bool:
        """커서 뒤 한 글자 삭제"""
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[:self.cursor] + self.text[self.cursor + 1:]
        return True

    def move_left(self) -> bool:
        if self.cursor == 0:
            return False
        self.cursor -= 1
        return True

    def move_right(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.cursor += 1
        return True

    def home(self) -> bool:
        moved = self.cursor != 0
        self.cursor = 0
        return moved

    def end(self) -> bool:
        moved = self.cursor != len(self.text)
        self.cursor = len(self.text)
        return moved

    def __repr__(self):
        return f"TextBuffer({self.text!r}, cursor={self.cursor})"
