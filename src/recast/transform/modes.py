"""Transform mode catalog: mode id -> instruction fragment and output format."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputFormat(str, Enum):
    """Declared shape of a provider reply."""

    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class ModeDefinition:
    """A rewriting intent: what to ask the model for and what shape to expect."""

    instruction: str
    output_format: OutputFormat = OutputFormat.TEXT


MODE_CATALOG: dict[str, ModeDefinition] = {
    "summarize": ModeDefinition("主要な情報のみを抽出し、短縮して出力する"),
    "expand": ModeDefinition("各要素を詳細に展開して出力する"),
    "outline": ModeDefinition("階層的なアウトライン構造として出力する"),
    "bulletize": ModeDefinition("箇条書き形式として出力する（評価語なし）"),
    "compress": ModeDefinition("最小の語数で意味を保持して出力する"),
    "formalize": ModeDefinition("形式的・公式な文体に変換して出力する"),
    "simplify": ModeDefinition("平易な語彙と構造に変換して出力する"),
    "abstract": ModeDefinition("具体的な詳細を除去し、抽象的な記述として出力する"),
    "extract_claims": ModeDefinition("明示的・暗示的な主張のみを列挙する"),
    "extract_assumptions": ModeDefinition("前提として置かれている事柄を列挙する"),
    "extract_structure": ModeDefinition("論理構造・関係性を記述する"),
    "remove_evaluation": ModeDefinition("評価語・感情語を除去し、事実記述のみを残す"),
    "neutralize": ModeDefinition("立場・価値判断を除去し、中立的な記述に変換する"),
    "invert": ModeDefinition("論旨・立場を反転して出力する"),
    "json": ModeDefinition("JSON形式として出力する", OutputFormat.JSON),
    "yaml": ModeDefinition("YAML形式として出力する"),
    "table": ModeDefinition("テーブル形式（マークダウン）として出力する"),
    "pseudo_code": ModeDefinition("疑似コード形式として出力する"),
    "markdown": ModeDefinition("見出し・リストを用いたマークダウン形式として出力する"),
    "translate": ModeDefinition("入力テキストを指定言語に翻訳する。意味・ニュアンスを保持する。"),
}


def lookup(mode_id: str) -> ModeDefinition:
    """Resolve a mode id. Unknown ids pass through as their own instruction."""
    definition = MODE_CATALOG.get(mode_id)
    if definition is None:
        return ModeDefinition(instruction=mode_id, output_format=OutputFormat.TEXT)
    return definition


def all_modes() -> list[tuple[str, ModeDefinition]]:
    """All catalogued modes in display order."""
    return list(MODE_CATALOG.items())
