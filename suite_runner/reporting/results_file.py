"""Test results file writers.

JUnit XML comes from pytest itself and is only re-encoded here. The JSON
results file is written by suite-runner.
"""

import codecs
import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from .depth import to_plain

_XML_DECLARATION = re.compile(r"""^(<\?xml[^>]*?encoding=)(["'])[^"']*\2""")


def is_utf8(encoding: str) -> bool:
    return codecs.lookup(encoding).name == "utf-8"


def reencode_file(path: Path, encoding: str) -> Path:
    """Rewrite a UTF-8 XML file in another encoding.

    The XML declaration is updated to name the new encoding. Characters
    the encoding cannot represent become character references.
    """
    path = Path(path)
    if is_utf8(encoding):
        return path

    text = path.read_text(encoding="utf-8")
    text = _XML_DECLARATION.sub(lambda m: f"{m.group(1)}{m.group(2)}{encoding}{m.group(2)}", text, count=1)

    with open(path, "w", encoding=encoding, errors="xmlcharrefreplace") as f:
        f.write(text)

    return path


def write_json_results(
    output: dict[str, Any],
    path: Path,
    framework_version: str,
    encoding: str = "utf-8",
) -> Path:
    """Save the full run result as a JSON results file.

    Args:
        output: Run result from ExecutionResult.to_output().
        path: Output file path.
        framework_version: Version of the framework that ran the tests.
        encoding: Text encoding of the file.

    Returns:
        Path to the saved file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    report = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "framework_version": framework_version,
        **to_plain(output),
    }

    with open(path, "w", encoding=encoding) as f:
        json.dump(report, f, indent=2, ensure_ascii=not _can_encode_all(encoding))

    return path


def _can_encode_all(encoding: str) -> bool:
    return codecs.lookup(encoding).name.startswith("utf")
