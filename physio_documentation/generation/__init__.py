"""
Generation Layer - Clinical Note Composition

Submodules:
    note_composer.py → NoteComposer and the ComposedNote result

Dependency Rule:
    This layer depends on: core, scoring
    This layer is used by: workspace
"""

from physio_documentation.generation.note_composer import ComposedNote, NoteComposer

__all__ = [
    "ComposedNote",
    "NoteComposer",
]
