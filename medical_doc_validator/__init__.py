"""
Medical Document Validator — AI-assisted checks for uploaded sick notes.

Architecture: Input normalization → Gemini (multimodal) → Defensive parsing
Philosophy:  The model judges the document. Code owns the output contract.
"""

__version__ = "1.0.0"
