from __future__ import annotations


class S3ImportError(RuntimeError):
    pass


class BucketNotFoundError(S3ImportError):
    def __init__(self, bucket_name: str) -> None:
        super().__init__(f"Cannot find bucket named {bucket_name}")
        self.bucket_name = bucket_name


class EventOutputsError(S3ImportError):
    pass


class MissingEventOutputsError(EventOutputsError):
    pass


class IncompleteEventOutputsError(EventOutputsError):
    pass


class UnsupportedEventTypeError(S3ImportError):
    def __init__(self, message: str, *, event_type: str) -> None:
        super().__init__(message)
        self.event_type = event_type


class UnsupportedConsumerTypeError(UnsupportedEventTypeError):
    pass


class UnsupportedNotificationTypeError(UnsupportedEventTypeError):
    pass
