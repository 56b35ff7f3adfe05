from gradebook.storage.base import GradebookStore
from gradebook.storage.loader import GradebookDataLoader
from gradebook.storage.memory import InMemoryGradebookStore
from gradebook.storage.sql import SqlGradebookStore

__all__ = [
    'GradebookStore',
    'GradebookDataLoader',
    'InMemoryGradebookStore',
    'SqlGradebookStore',
]
