"""
metrics.py - Extraction metrics for monitoring
"""
from prometheus_client import Counter, Histogram, generate_latest
from functools import wraps
import time
from config import settings

documents_processed = Counter(
    'patient_extractor_documents_total',
    'Documents processed',
    ['source']  # 'text' or 'file'
)

values_extracted = Counter(
    'patient_extractor_values_total',
    'Values extracted',
    ['field']  # 'patient_names', 'dates_of_birth', 'claim_ids'
)

name_fallbacks = Counter(
    'patient_extractor_name_fallbacks_total',
    'Name extractions served by the cue-pattern fallback',
    ['reason']  # 'unavailable', 'error' or 'empty'
)

document_read_failures = Counter(
    'patient_extractor_document_read_failures_total',
    'Documents that could not be read'
)

extraction_duration = Histogram(
    'patient_extractor_duration_seconds',
    'Extraction duration per document',
    ['stage']  # 'names', 'dates', 'claim_ids'
)

def track_stage(stage: str):
    """Decorator to time an extraction stage"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not settings.get('enable_metrics', True):
                return func(*args, **kwargs)
            start = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                extraction_duration.labels(stage).observe(time.time() - start)
        return wrapper
    return decorator

def record_fallback(reason: str):
    if settings.get('enable_metrics', True):
        name_fallbacks.labels(reason).inc()

def record_document(source: str, result) -> None:
    """Count a processed document and the values found in it"""
    if not settings.get('enable_metrics', True):
        return
    documents_processed.labels(source).inc()
    for field, values in result.to_dict().items():
        values_extracted.labels(field).inc(len(values))

def record_read_failure():
    if settings.get('enable_metrics', True):
        document_read_failures.inc()

def get_metrics() -> str:
    """Prometheus exposition text for the default registry"""
    return generate_latest().decode("utf-8")
