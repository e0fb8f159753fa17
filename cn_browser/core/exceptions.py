class CnBrowserError(Exception):
    """Base exception for all cn_browser errors"""
    pass

class ConfigError(CnBrowserError):
    """Invalid or inconsistent global.json or environment overrides"""
    pass

class DatasetSchemaError(CnBrowserError):
    """
    Copy-number table header doesn't match what the loader expects
    missing fixed fields, no cell-line columns, etc
    """
    pass

class DatasetLoadError(CnBrowserError):
    """Reading or parsing the copy-number source failed"""
    pass

class FilterListError(CnBrowserError):
    """The remote filter-list service could not be reached or returned garbage"""
    pass
