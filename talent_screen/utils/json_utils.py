import json
import re
from typing import Any, Dict, Optional


def extract_json_object(content: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object out of LLM output.

    Strips ```json fences, then falls back to the first {...} block.
    Returns None if nothing parses to a dict.
    """
    if not content:
        return None
    text = content.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()

    try:
        obj = json.loads(text)
        if isinstance(obj, dict):
            return obj
    except json.JSONDecodeError:
        pass

    m = re.search(r"\{.*\}", text, flags=re.DOTALL)
    if m:
        try:
            obj = json.loads(m.group(0))
            if isinstance(obj, dict):
                return obj
        except json.JSONDecodeError:
            pass
    return None
