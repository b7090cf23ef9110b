import datetime
import os
import yaml


def custom_settings():
    settings_file = os.environ.get('DJANGO_SETTINGS_FILE')
    loaded = None
    if settings_file and os.path.exists(settings_file):
        with open(settings_file, 'r') as f:
            loaded = yaml.safe_load(f)
    return loaded or {}


def parse_clock(value, default):
    """
    Accepts "HH:MM" or "HHMM" strings. YAML 1.1 loads an unquoted 19:30 as
    the sexagesimal int 1170, i.e. minutes since midnight.
    """
    if value is None:
        value = default
    if isinstance(value, datetime.time):
        return value
    if isinstance(value, bool):
        raise ValueError(f'Invalid clock time {value!r}')
    if isinstance(value, int):
        hours, minutes = divmod(value, 60)
        return datetime.time(hours, minutes)
    value = str(value).strip()
    if ':' not in value and len(value) == 4:
        value = f'{value[:2]}:{value[2:]}'
    return datetime.time.fromisoformat(value)
