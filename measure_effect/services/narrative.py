"""
Placeholder text generation for the assistant endpoints.

No model is called: the question or the dashboard data is embedded into a
fixed Japanese template so the UI can exercise its chat and report panels.
Swap TemplateNarrator for a real generator behind the same two methods.
"""

import json
from typing import Any


def _dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2, default=str)


class TemplateNarrator:
    """Fills the chat answer and effect report templates with request data."""

    def answer(self, question: str) -> str:
        return (
            f"ご質問: 「{question}」\n"
            "\n"
            "AIによる回答: このデータに基づいて、ご質問にお答えします。\n"
            "（例: 株式会社〇〇の最近のアポ率は〇〇%です。）"
        )

    def report(self, summary_data: Any, client_details_data: Any) -> str:
        return (
            "## 施策効果レポート\n"
            "\n"
            "### 月次サマリー\n"
            f"{_dump(summary_data)}\n"
            "\n"
            "### クライアント詳細\n"
            f"{_dump(client_details_data)}\n"
            "\n"
            "上記データに基づき、AIが生成したレポートがここに表示されます。\n"
            "例: 「〇〇クライアントのトーク改善施策により、アポ率がX%からY%に向上しました。」"
        )
