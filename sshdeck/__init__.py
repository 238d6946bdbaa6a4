"""sshdeck - keep ~/.ssh/config as an editable host list."""

__version__ = "0.3.0"
