"""Test configuration."""

import os

os.environ["BUNDLESCOPE_ENVIRONMENT"] = "testing"
# Never pop a browser from the test suite
os.environ["BUNDLESCOPE_OPEN_BROWSER"] = "false"
