"""Config Script Loaders.

Implementations of the IScriptLoader protocol for executable
configuration files (.js/.cjs/.mjs/.ts/.cts/.mts).
"""

import asyncio
import json
import os
import shutil
from typing import Any, Mapping, Optional, Sequence

from config.constants import LogArea, TYPESCRIPT_EXTENSIONS
from core.exceptions import ScriptLoaderError
from core.protocols import ILogger, IScriptLoader
from utils.logging import create_logger

# Node.js 측에서 모듈을 import하고 결과를 JSON으로 출력
_NODE_SHIM = r"""
const { pathToFileURL } = require('node:url');
(async () => {
  const mod = await import(pathToFileURL(process.argv[1]).href);
  let value = mod.default;
  if (value === undefined) {
    const keys = Object.keys(mod).filter((key) => key !== 'default');
    if (keys.length > 0) {
      value = Object.fromEntries(keys.map((key) => [key, mod[key]]));
    }
  }
  if (typeof value === 'function') {
    value = value();
  }
  value = await value;
  process.stdout.write(JSON.stringify(value === undefined ? null : value));
})().catch((error) => {
  process.stderr.write(String((error && error.stack) || error));
  process.exit(1);
});
"""


class NodeScriptLoader(IScriptLoader):
    """Evaluates config scripts in a Node.js subprocess.

    The module's default export (or the CommonJS namespace) is taken,
    called if it is a function, awaited, and returned as plain data.
    TypeScript files are loaded with a TypeScript-capable import hook.
    """

    def __init__(
        self,
        node_binary: str = "node",
        typescript_args: Sequence[str] = ("--import", "tsx"),
        logger: Optional[ILogger] = None,
    ) -> None:
        """Initialize Node script loader.

        Args:
            node_binary: Node.js executable name or path.
            typescript_args: Extra Node arguments for TypeScript files.
            logger: Logger (default: config area logger).
        """
        self._node_binary = node_binary
        self._typescript_args = tuple(typescript_args)
        self._logger = logger or create_logger(area=LogArea.CONFIG)

    def build_command(self, path: str) -> list[str]:
        """Build the Node.js command line for a config script.

        Raises:
            ScriptLoaderError: If the Node.js binary is not found.
        """
        node = shutil.which(self._node_binary)
        if node is None:
            raise ScriptLoaderError(
                f"Node.js executable not found: {self._node_binary}",
                config_file=path,
            )

        cmd = [node]
        if os.path.splitext(path)[1] in TYPESCRIPT_EXTENSIONS:
            cmd += self._typescript_args
        cmd += ["-e", _NODE_SHIM, os.path.abspath(path)]
        return cmd

    async def load(self, path: str) -> Any:
        """Evaluate a config script.

        Args:
            path: Script path.

        Returns:
            Exported configuration value.

        Raises:
            ScriptLoaderError: If the script fails or returns non-JSON data.
        """
        cmd = self.build_command(path)
        self._logger.debug("Evaluating config script", path=path)

        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout_bytes, stderr_bytes = await process.communicate()
        stdout = stdout_bytes.decode("utf-8", errors="backslashreplace")
        stderr = stderr_bytes.decode("utf-8", errors="backslashreplace")

        if process.returncode != 0:
            raise ScriptLoaderError(
                f"Config script exited with code {process.returncode}",
                stderr=stderr,
                config_file=path,
            )

        try:
            return json.loads(stdout)
        except json.JSONDecodeError as e:
            raise ScriptLoaderError(
                "Config script did not produce JSON output",
                stderr=stderr,
                config_file=path,
                cause=e,
            ) from e


class FakeScriptLoader(IScriptLoader):
    """Fake script loader for testing.

    Example:
        ```python
        loader = FakeScriptLoader({"app.config.ts": {"name": "app"}})
        assert await loader.load("/work/app.config.ts") == {"name": "app"}
        ```
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        """Initialize fake loader.

        Args:
            values: Value per file name (basename).
        """
        self._values = dict(values or {})
        self._loaded: list[str] = []

    def set_value(self, file_name: str, value: Any) -> None:
        """Set value returned for a file name."""
        self._values[file_name] = value

    async def load(self, path: str) -> Any:
        """Return the configured value for the file name."""
        self._loaded.append(path)
        file_name = os.path.basename(path)
        if file_name not in self._values:
            raise ScriptLoaderError(
                f"No fake value for config script: {file_name}",
                config_file=path,
            )
        return self._values[file_name]

    @property
    def loaded(self) -> list[str]:
        """Load call history."""
        return self._loaded
