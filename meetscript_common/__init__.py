from meetscript_common.logging import register_secret, setup_logging

__all__ = ["setup_logging", "register_secret"]
