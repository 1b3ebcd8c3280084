class TestGridGeneratorError(Exception):
    """Base class for fatal errors while generating TestGrid configuration"""
    pass


class ReleaseConfigError(TestGridGeneratorError):
    """Exception raised when a release controller config can't be read or parsed"""


class TestGridConfigError(TestGridGeneratorError):
    """Exception raised when a TestGrid config file can't be read, parsed or written"""
