from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


OUTPUT_FORMATS = ("Text", "Markdown", "JSON", "List")

FORMAT_INSTRUCTIONS = {
    "JSON": "Always respond in strictly valid JSON.",
    "Markdown": "Write a well-structured response using Markdown.",
    "List": "Respond concisely as an itemized list.",
}


@dataclass(frozen=True)
class AgentConfig:
    """Role, goal and output format that shape a session's system message.

    Two configs are the same agent when all three fields are equal; a field
    the client left out is the empty string.
    """

    role: str = ""
    goal: str = ""
    output_format: str = ""


def build_system_prompt(config: Optional[AgentConfig]) -> Optional[str]:
    if config is None:
        return None

    prompt = ""
    if config.role:
        prompt += f"Role: {config.role}\n\n"
    if config.goal:
        prompt += f"Goal: {config.goal}\n\n"
    if config.output_format:
        prompt += f"Output format: {config.output_format}\n\n"
        # Text and unknown formats get no extra instruction
        prompt += FORMAT_INSTRUCTIONS.get(config.output_format, "")

    return prompt.strip()
