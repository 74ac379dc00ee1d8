# -*- coding: utf-8 -*-
# trace_viewer.py — 乘法过程气泡图：每次迭代一行，显示 mr_reg 各位，本周期被清掉的位高亮
#
# 用法：
#   python trace_viewer.py 10001011 01011011

from __future__ import annotations
import sys

from PySide6.QtCore import QPointF
from PySide6.QtGui import QBrush, QPen, QColor, QPainter
from PySide6.QtWidgets import (
    QApplication, QGraphicsView, QGraphicsScene, QGraphicsEllipseItem, QGraphicsSimpleTextItem,
    QMainWindow, QWidget, QVBoxLayout, QLabel
)

from ngen_params import Dimensions
from sim_multiplier import MulResult, TwoLevelMultiplier, dims_for_operands, trace_rows

# ---------- layout constants ----------
ROW_GAP = 26.0
COL_GAP = 24.0
RADIUS = 9.0

# ---------- colors ----------
COL_SET   = QColor("#4C8BF5")
COL_CLEAR = QColor("#DDDDDD")
COL_HIT   = QColor("#FFD166")
BG_COLOR  = QColor("#f5f7fb")


class BitBubble(QGraphicsEllipseItem):
    def __init__(self, pos: int, value: bool, hit: bool, radius=RADIUS):
        super().__init__(-radius, -radius, 2*radius, 2*radius)
        self.pos_ = pos
        if hit:
            pen = QPen(COL_HIT.darker(140), 2); brush = QBrush(COL_HIT)
        elif value:
            pen = QPen(COL_SET.darker(130), 1.2); brush = QBrush(COL_SET.lighter(130))
        else:
            pen = QPen(COL_CLEAR.darker(130), 1.0); brush = QBrush(COL_CLEAR)
        self.setPen(pen); self.setBrush(brush)
        self.setToolTip(f"bit {pos} = {int(value)}")


class TraceView(QGraphicsView):
    def __init__(self, scene):
        super().__init__(scene)
        self.setRenderHints(QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setBackgroundBrush(BG_COLOR)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)

    def wheelEvent(self, event):
        factor = 1.15 if event.angleDelta().y() > 0 else 1 / 1.15
        target = self.transform().m11() * factor
        if 0.25 <= target <= 4.0:
            self.scale(factor, factor)
        else:
            event.ignore()


class MainWin(QMainWindow):
    def __init__(self, result: MulResult, dims: Dimensions):
        super().__init__()
        self.setWindowTitle(f"Two-level multiplier trace (n={dims.n})")
        self.resize(min(1400, 200 + int(dims.n * COL_GAP)), 640)

        self.scene = QGraphicsScene(self)
        self.view = TraceView(self.scene)

        lay = QVBoxLayout()
        info = QLabel(f"{result.mr} * {result.md} = {result.product}    "
                      f"迭代次数 {result.iterations}（= mr 中 1 的个数）")
        info.setStyleSheet("color:#555")
        lay.addWidget(info)
        lay.addWidget(self.view)
        cw = QWidget(); cw.setLayout(lay)
        self.setCentralWidget(cw)

        self.build(result, dims)

    def build(self, result: MulResult, dims: Dimensions):
        self.scene.clear()
        for c in range(dims.n):
            t = QGraphicsSimpleTextItem(str(dims.n - 1 - c)); t.setBrush(QBrush(QColor("#999")))
            t.setPos(c * COL_GAP - 4, -ROW_GAP - 8); self.scene.addItem(t)
            # group boundary every q bits
            if c and c % dims.q == 0:
                mark = QGraphicsSimpleTextItem("|"); mark.setBrush(QBrush(QColor("#bbb")))
                mark.setPos(c * COL_GAP - COL_GAP / 2 - 2, -ROW_GAP - 8); self.scene.addItem(mark)

        for row, (index, bits, shamt) in enumerate(trace_rows(result, dims)):
            y = row * ROW_GAP
            label = QGraphicsSimpleTextItem(f"i{index}  sh={shamt}")
            label.setBrush(QBrush(QColor("#666"))); label.setPos(-90, y - 8)
            self.scene.addItem(label)
            for c, value in enumerate(bits):
                pos = dims.n - 1 - c
                b = BitBubble(pos, value, hit=(pos == shamt))
                b.setPos(QPointF(c * COL_GAP, y))
                self.scene.addItem(b)

        self.view.setSceneRect(self.scene.itemsBoundingRect().adjusted(-40, -40, 40, 40))
        self.view.centerOn(QPointF(0, 0))


def show_trace(mr_bits: str, md_bits: str) -> int:
    dims = dims_for_operands(mr_bits, md_bits)
    result = TwoLevelMultiplier(dims).multiply(int(mr_bits, 2), int(md_bits, 2))
    app = QApplication.instance() or QApplication(sys.argv)
    win = MainWin(result, dims)
    win.show()
    return app.exec()


def main():
    mr = sys.argv[1] if len(sys.argv) > 1 else "10001011"
    md = sys.argv[2] if len(sys.argv) > 2 else "01011011"
    sys.exit(show_trace(mr, md))


if __name__ == "__main__":
    main()
