from dataclasses import dataclass, field

DEFAULT_TOPIC = "default"


@dataclass
class Session:
    topic: str = DEFAULT_TOPIC               # label for the current voting round
    votes: dict[str, int] = field(default_factory=dict)   # voter -> last value

    def add_vote(self, voter_name: str, value: int) -> None:
        """Record a vote. Only the last vote per voter is kept."""
        self.votes[voter_name] = value
