"""Load and validate gz_docs configuration YAML.

The configuration names the content API (host and version) that serves docs
metadata, markdown, and images, plus optional overrides for page ordering,
library reference links, edit links, and the HTML output directory.

Examples
--------
>>> from pathlib import Path
>>> from gz_docs.config import load_docs_config
>>> config = load_docs_config(Path("config/docs.yaml"))  # doctest: +SKIP
>>> config.api.host  # doctest: +SKIP
'https://api.gazebosim.org'
"""

from .loader import load_docs_config
from .models import ApiConfig, DocsConfig, DocsConfigError

__all__ = ["ApiConfig", "DocsConfig", "DocsConfigError", "load_docs_config"]
