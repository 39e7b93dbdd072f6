import json
import os
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="turing_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = self._utc_day()
        self.current_log = self._get_log_filename()

    @classmethod
    def from_config(cls, config):
        """Build a logger from runtime config, or None when logging is switched off."""
        if not config.get("log_enabled", True):
            return None
        return cls(config["output_directory"], config["log_file_prefix"])

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    @staticmethod
    def _stamp(entry):
        return {"timestamp": datetime.now(timezone.utc).isoformat(), **entry}

    def log(self, entry: dict):
        """Log a single entry to the main run log."""
        self._roll_day()
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(self._stamp(entry)) + "\n")

    def log_event(self, event: str, **fields):
        self.log({"event": event, **fields})

    @staticmethod
    def _utc_day():
        return datetime.now(timezone.utc).strftime("%Y-%m-%d")

    def _roll_day(self):
        if self._utc_day() != self.today:
            self.rotate()

    def rotate(self):
        """Start a new main log file for the current UTC day."""
        self.today = self._utc_day()
        self.current_log = self._get_log_filename()

    def log_accepted(self, entries: list):
        """Log runs that reached the accept state."""
        self._roll_day()
        filename = f"accepted_{self.today}.jsonl"
        self._log_to_file(filename, [self._stamp(e) for e in entries])

    def log_rejected(self, entries: list):
        """Log runs that stopped on a missing transition."""
        self._roll_day()
        filename = f"rejected_{self.today}.jsonl"
        self._log_to_file(filename, [self._stamp(e) for e in entries])
