"""
best score persistence

a single integer stored under a key in a pickled dict, so other keys
can share the same file
"""
import os
import pickle


STORAGE_KEY = "2048-best-score"


class BestScoreStore:
    def __init__(self, path=None, key=STORAGE_KEY):
        """
        args:
            path: pickle file to persist to, memory only if None
            key: entry in the file holding the best score
        """
        self.path = path
        self.key = key
        self._best_score = self._load()

    @property
    def best_score(self):
        return self._best_score

    def _read_file(self):
        if self.path is None or not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, 'rb') as f:
                data = pickle.load(f)
        except (OSError, pickle.UnpicklingError, EOFError) as e:
            print(f"Could not read best score from {self.path}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _load(self):
        value = self._read_file().get(self.key, 0)
        try:
            return max(int(value), 0)
        except (TypeError, ValueError):
            return 0

    def update(self, score):
        """store score if it beats the current best, returns the best score"""
        if score <= self._best_score:
            return self._best_score

        self._best_score = score
        if self.path is not None:
            data = self._read_file()
            data[self.key] = score
            try:
                with open(self.path, 'wb') as f:
                    pickle.dump(data, f)
            except OSError as e:
                # best score stays in memory for this session
                print(f"Could not save best score to {self.path}: {e}")
        return self._best_score
