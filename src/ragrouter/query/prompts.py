"""
System roles offered by the chat front ends.
"""

DEFAULT_ROLE = "RAG-Base"

# role key -> (label shown to the user, system prompt)
SYSTEM_ROLES = {
    DEFAULT_ROLE: (
        "RAG assistant (Finance, AI)",
        "You are a helpful assistant. When the user message contains additional "
        "information, base your answer on it. Answer in the language of the "
        "question and say so when the information is not enough to answer.",
    ),
}


def system_prompt(role: str = DEFAULT_ROLE) -> str:
    if role not in SYSTEM_ROLES:
        raise KeyError(f"Unknown system role '{role}'")
    return SYSTEM_ROLES[role][1]
