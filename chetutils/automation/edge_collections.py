"""
Export Microsoft Edge collections through Selenium.

Opens edge://collections in a browser profile and, for every collection,
clicks through "更多操作" (more actions) -> "导出" (export) -> the export
format, leaving the file in the configured download directory.

Requires the `automation` extra (selenium).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

COLLECTIONS_URL = "edge://collections"
COLLECTION_NAME_CLASS = "collection-name"
MORE_ACTIONS_LABEL = "更多操作"
EXPORT_LABEL = "导出"
DEFAULT_EXPORT_FORMAT = "HTML"

PAGE_LOAD_SECONDS = 5.0
STEP_SECONDS = 2.0
DOWNLOAD_SECONDS = 5.0


def create_edge_driver(user_data_dir: Optional[str] = None, download_dir: Optional[str] = None):
    """Start Edge with the given profile directory and download folder."""
    from selenium import webdriver

    options = webdriver.EdgeOptions()
    if user_data_dir:
        options.add_argument(f"--user-data-dir={user_data_dir}")
    if download_dir:
        options.add_experimental_option("prefs", {"download.default_directory": download_dir})
    return webdriver.Edge(options=options)


def _button_xpath(label: str) -> str:
    return f"//button[@aria-label='{label}']"


def export_collections(driver: Any, export_format: str = DEFAULT_EXPORT_FORMAT,
                       wait: Callable[[float], None] = time.sleep,
                       page_load_seconds: float = PAGE_LOAD_SECONDS,
                       step_seconds: float = STEP_SECONDS,
                       download_seconds: float = DOWNLOAD_SECONDS) -> list[str]:
    """
    Export every collection, then quit the driver.

    A browser error stops the run; it is logged and the collections
    exported so far are returned.

    Returns:
        Names of the collections that were exported.
    """
    from selenium.common.exceptions import WebDriverException
    from selenium.webdriver.common.by import By

    exported: list[str] = []
    try:
        driver.get(COLLECTIONS_URL)
        wait(page_load_seconds)

        collections = driver.find_elements(By.CLASS_NAME, COLLECTION_NAME_CLASS)
        logger.info(f"Found {len(collections)} collection(s)")

        for collection in collections:
            name = collection.text
            logger.info(f"处理集锦: {name}")

            collection.click()
            wait(step_seconds)
            for label in (MORE_ACTIONS_LABEL, EXPORT_LABEL, export_format):
                driver.find_element(By.XPATH, _button_xpath(label)).click()
                wait(step_seconds)

            # Give the browser time to write the download
            wait(download_seconds)
            exported.append(name)
    except WebDriverException as e:
        logger.error(f"发生错误: {e.msg or e}")
    finally:
        driver.quit()
    return exported
