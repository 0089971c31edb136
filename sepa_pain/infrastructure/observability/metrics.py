"""Prometheus metrics for document throughput and validation failures"""

from prometheus_client import Counter, Histogram

documents_serialized_counter = Counter(
    "sepa_documents_serialized_total",
    "Documents serialized to XML",
    ["pain_format"],
)

transactions_serialized_counter = Counter(
    "sepa_transactions_serialized_total",
    "Transactions emitted into documents",
    ["method"],  # DD | TRF
)

validation_failure_counter = Counter(
    "sepa_validation_failures_total",
    "Fields rejected during serialization",
    ["entity"],  # payment_info | transaction
)

serialization_duration_histogram = Histogram(
    "sepa_document_serialization_seconds",
    "Time to normalize, build and serialize a document",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)


def record_document(pain_format: str, method: str, transaction_count: int) -> None:
    """Record one serialized document and its transactions"""
    documents_serialized_counter.labels(pain_format=pain_format).inc()
    if transaction_count:
        transactions_serialized_counter.labels(method=method).inc(transaction_count)
