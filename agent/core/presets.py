from __future__ import annotations

from typing import Dict, List


# Ready-made agents the chat UI offers in its picker.
AGENT_PRESETS: List[Dict[str, str]] = [
    {
        "id": "default",
        "name": "Default assistant",
        "role": "Friendly AI assistant",
        "goal": "Give accurate, helpful answers to the user's questions",
        "outputFormat": "Text",
    },
    {
        "id": "marketer",
        "name": "Marketing expert",
        "role": "Professional marketer",
        "goal": "Suggest product copy, ad slogans and marketing strategies",
        "outputFormat": "Markdown",
    },
    {
        "id": "coder",
        "name": "Coding helper",
        "role": "Experienced programmer",
        "goal": "Help write code, fix bugs and explain programming concepts",
        "outputFormat": "Markdown",
    },
    {
        "id": "writer",
        "name": "Writer",
        "role": "Creative writer",
        "goal": "Help draft stories, scripts and other content",
        "outputFormat": "Text",
    },
    {
        "id": "analyzer",
        "name": "Data analyst",
        "role": "Data analysis expert",
        "goal": "Analyze data and report insights",
        "outputFormat": "JSON",
    },
    {
        "id": "teacher",
        "name": "Teacher",
        "role": "Kind teacher",
        "goal": "Explain concepts simply and clearly",
        "outputFormat": "List",
    },
]
