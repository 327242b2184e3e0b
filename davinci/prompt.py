"""Prompt formatting for the dialogue-style completion prompt."""

PROMPT_TEMPLATE = "{context}.\nH: {question}.\nIA:"


def build_prompt(context: str, question: str) -> str:
    """Frame context and question as a two-party dialogue.

    The prompt ends on the assistant turn marker so the model continues as
    the assistant. Inputs are inserted verbatim.

    Example: build_prompt("Be brief", "Hi") -> "Be brief.\\nH: Hi.\\nIA:"
    """
    return PROMPT_TEMPLATE.format(context=context, question=question)
