"""Commit Suggestion Package"""

from smartgit.suggest.categorizer import FileCategorizer, BUCKET_ORDER, DOCS, TEST, CONFIGURATION, STYLE, SOURCE
from smartgit.suggest.inferencer import TypeInferencer
from smartgit.suggest.synthesizer import MessageSynthesizer, format_message, infer_feature

__all__ = [
    "FileCategorizer",
    "TypeInferencer",
    "MessageSynthesizer",
    "format_message",
    "infer_feature",
    "BUCKET_ORDER",
    "DOCS",
    "TEST",
    "CONFIGURATION",
    "STYLE",
    "SOURCE",
]
