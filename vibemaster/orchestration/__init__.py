from .combiner import ResponseCombiner, render_answer, DEFAULT_SUGGESTIONS

__all__ = ["ResponseCombiner", "render_answer", "DEFAULT_SUGGESTIONS"]
