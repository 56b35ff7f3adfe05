from gradebook.rendering.renderer import TranscriptRenderer

__all__ = ['TranscriptRenderer']
