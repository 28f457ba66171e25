"""
Sample notes and the degraded search used when the API is offline.

This is a separate, simpler policy from the server search: matching is a
case-insensitive substring test on subject/topic, and the summary card is
always shown.
"""

MOCK_NOTES = [
    {"id": "1", "branch": "Computer Science", "subject": "Data Structures", "topic": "Binary Trees",
     "description": "Introduction to BST and AVL trees with time complexity analysis.", "filePath": "#"},
    {"id": "2", "branch": "Mechanical", "subject": "Thermodynamics", "topic": "Laws of Thermodynamics",
     "description": "Summary of 1st and 2nd laws with real-world engine examples.", "filePath": "#"},
    {"id": "3", "branch": "Civil", "subject": "Fluid Mechanics", "topic": "Bernoulli Principle",
     "description": "Derivations, solved examples, and hydraulic applications.", "filePath": "#"},
    {"id": "4", "branch": "Electrical", "subject": "Circuit Theory", "topic": "Kirchhoffs Laws",
     "description": "KCL and KVL explained with complex circuit diagrams.", "filePath": "#"},
    {"id": "5", "branch": "Information Technology", "subject": "Web Dev", "topic": "React Hooks",
     "description": "Deep dive into useState, useEffect and custom hooks.", "filePath": "#"},
]

DEMO_FILE_PATH = "#"


def is_demo_note(note: dict) -> bool:
    return note.get("filePath") == DEMO_FILE_PATH


def offline_summary(query: str) -> dict:
    return {
        "title": "Generative Concept Summary",
        "summary": (
            f'(Offline Mode) Since the backend is disconnected, we can\'t search live files for "{query}". '
            "However, typically this topic involves fundamental engineering concepts found in standard curriculum."
        ),
    }


def offline_search(query: str, notes: list[dict] | None = None) -> dict:
    """Substring match over the sample notes plus the offline summary card."""
    notes = MOCK_NOTES if notes is None else notes
    needle = query.lower()
    matches = [
        n for n in notes
        if needle in n["subject"].lower() or needle in n["topic"].lower()
    ]
    return {"internal": matches, "external": offline_summary(query)}
