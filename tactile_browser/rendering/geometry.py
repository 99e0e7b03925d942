"""화면 좌표계의 사각형"""


class Rect:
    def __init__(self, left, top, right, bottom):
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.bottom - self.top

    def containsPoint(self, x, y):
        return self.left <= x < self.right and self.top <= y < self.bottom

    def __repr__(self):
        return f"Rect({self.left}, {self.top}, {self.right}, {self.bottom})"
