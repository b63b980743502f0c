"""
どこで: `engine.core` サブパッケージ。
何を: 行優先の密行列 `Matrix`・4 列固定の `EdgeMatrix`・4×4 変換行列ジェネレータを提供。
なぜ: 点/辺の保持・変換・曲線平坦化の基盤を 1 箇所にまとめ、上位層から再利用可能にするため。
"""

from .edge_matrix import EdgeMatrix
from .matrix import Matrix, format_matrix

__all__ = ["Matrix", "EdgeMatrix", "format_matrix"]
