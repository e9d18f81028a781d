from django.utils import timezone


def local_now():
    """Current instant in the configured study time zone."""
    return timezone.localtime()


def local_today():
    return timezone.localdate()


def to_local_iso(dt):
    if dt is None:
        return None
    return timezone.localtime(dt).isoformat()
