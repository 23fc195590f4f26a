from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Implementations decide, for a path relative to the traversal root, whether the
    entry should be left out of every output. The walker only ever asks this single
    question, so alternative rule sources (a fixed list, a different ignore file
    format) can be swapped in without touching the traversal code.

    Example:
        >>> class SuffixRules(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith(".tmp")
        >>> rules = SuffixRules()
        >>> rules.exclude("build/temp.tmp")
        True
        >>> rules.exclude("main.py")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The file or directory path to check, relative to the root of
                the directory being processed and using forward slashes.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass
