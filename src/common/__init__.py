"""
どこで: `common` パッケージ。
何を: engine/curves 双方で使う軽量ユーティリティ（設定・環境変数パース・型エイリアス）。
なぜ: 共通基盤を分離し、依存の向きを単純化するため。
"""
