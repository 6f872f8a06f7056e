from referralhub.config.settings import settings

__all__ = ["settings"]
