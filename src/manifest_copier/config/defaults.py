"""預設設定值。"""

DEFAULT_CONFIG = {
    "archive": {
        "extensions": [".zip"],
        "case_insensitive_lookup": False,
    },
    "runner": {
        "reserve_failed_destinations": True,
    },
    "history": {
        "path": "~/.manifest_copier/history.json",
        "indent": 2,
    },
    "manifest": {
        "delimiter": ",",
        "encoding": "utf-8-sig",
        "skip_header": False,
    },
    "retry": {
        "max_retries": 2,
        "backoff_base_sec": 0.5,
        "backoff_cap_sec": 5.0,
    },
    "logging": {
        "level": "WARNING",
        "file": None,
    },
}
