from .annotation import (
    Annotator,
    apply_annotation_results,
    build_annotation_requests,
    parse_annotation_results,
)
from .json_utils import clean_json, extract_list, parse_json
from .models import AnnotationReport, AnnotationRequest, TranslationReport
from .translation import Translator

__all__ = [
    "AnnotationReport",
    "AnnotationRequest",
    "Annotator",
    "TranslationReport",
    "Translator",
    "apply_annotation_results",
    "build_annotation_requests",
    "clean_json",
    "extract_list",
    "parse_annotation_results",
    "parse_json",
]
