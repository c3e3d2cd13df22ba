#!/usr/bin/env python3
"""
Medical Document Validator — Entry Point
=========================================

Validates one medical document from disk and prints the verdict.

Usage:
    GEMINI_API_KEY=... python main.py note.pdf --name "Jane Doe"
    python main.py scan.jpg --name "Jane Doe" --model gemini-1.5-pro
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from medical_doc_validator.client import MedicalDocumentValidator
from medical_doc_validator.config import ValidatorConfig
from medical_doc_validator.models import Confidence, ValidationResult


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_YELLOW = "\033[93m"
_GREEN = "\033[92m"
_CYAN = "\033[96m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72

_CONFIDENCE_COLORS = {
    Confidence.HIGH: _GREEN,
    Confidence.MEDIUM: _YELLOW,
    Confidence.LOW: _RED,
}


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_report(path: str, subject_name: str, result: ValidationResult) -> int:
    """Pretty-print the verdict with ANSI color codes.

    Returns:
        0 if the document was accepted, 1 if rejected.
    """
    conf_color = _CONFIDENCE_COLORS[result.confidence]

    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  MEDICAL DOCUMENT VALIDATION{_RESET}")
    print(f"{'=' * _WIDTH}")
    print(f"  Document:    {path}")
    print(f"  Employee:    {subject_name}")
    print(f"{'─' * _WIDTH}")
    print(f"  Doctor:      {result.doctor_name or f'{_DIM}not found{_RESET}'}")
    print(f"  Degree:      {result.doctor_qualification or f'{_DIM}not found{_RESET}'}")
    print(f"  Confidence:  {conf_color}{result.confidence.value}{_RESET}")
    print(f"  Reason:      {result.reason}")
    print(f"{'=' * _WIDTH}")
    if result.is_valid:
        print(f"  {_GREEN}{_BOLD}DOCUMENT ACCEPTED{_RESET}")
    else:
        print(f"  {_RED}{_BOLD}DOCUMENT REJECTED{_RESET}")
    print(f"{'=' * _WIDTH}\n")

    return 0 if result.is_valid else 1


# ─── Main ────────────────────────────────────────────────────────────


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate a medical certificate with Gemini."
    )
    parser.add_argument("path", help="PDF or image of the medical document")
    parser.add_argument("--name", required=True, help="employee requesting leave")
    parser.add_argument("--model", help="override GEMINI_MODEL_NAME")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Validate the given document and exit with the verdict."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)

    config = ValidatorConfig.from_env()
    if args.model:
        config = config.model_copy(update={"model_name": args.model})

    print(f"\n  Validating {args.path} with {config.model_name}...")
    result = asyncio.run(
        MedicalDocumentValidator(config).validate_file(args.path, args.name)
    )
    sys.exit(print_report(args.path, args.name, result))


if __name__ == "__main__":
    main()
