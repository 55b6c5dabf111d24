"""Android property lookup through the getprop binary.

Ubuntu Touch devices ship the Android container's getprop at
/usr/bin/getprop. It prints the property value, or the given default when
the property is unset:

  $ getprop rild.libpath ''
  /system/lib/libril-qc-qmi-1.so
  $ getprop ril.num_slots 1
  2
"""

import logging
import os
import subprocess

from ofono_accounts.base_backends import BasePropertyQuery
from ofono_accounts.config import DEFAULT_GETPROP_PATH
from ofono_accounts.exceptions import PropertyQueryError

logger = logging.getLogger(__name__)


class GetpropPropertyQuery(BasePropertyQuery):
    """Runs getprop once per property with a bounded timeout."""

    def __init__(self, getprop_path: str = DEFAULT_GETPROP_PATH, timeout: float = 5.0):
        self.getprop_path = getprop_path
        self.timeout = timeout

    def available(self) -> bool:
        return os.path.isfile(self.getprop_path) and os.access(self.getprop_path, os.X_OK)

    def get(self, name: str, default: str = "") -> str:
        try:
            output = subprocess.check_output(
                [self.getprop_path, name, default],
                text=True,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise PropertyQueryError(f"getprop {name} timed out after {self.timeout}s") from e
        except (subprocess.CalledProcessError, OSError) as e:
            raise PropertyQueryError(f"getprop {name} failed: {e}") from e
        except UnicodeDecodeError as e:
            raise PropertyQueryError(f"getprop {name} printed undecodable output: {e}") from e

        logger.debug("getprop %s -> %r", name, output)
        return output
