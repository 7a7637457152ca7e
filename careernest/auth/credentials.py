"""
Credential Generation Strategies
Human-readable usernames/passwords issued when an organization is approved
"""

import random
from typing import NamedTuple, Optional, Protocol


class GeneratedCredentials(NamedTuple):
    username: str
    password: str


class CredentialGenerator(Protocol):
    """Anything that can produce a fresh username/password pair"""

    def generate(self) -> GeneratedCredentials:
        ...


class AdjectiveNounCredentialGenerator:
    """
    Usernames like ``techlabs42`` with passwords like ``techlabs42@517``

    Pass a seeded ``random.Random`` for deterministic output.
    """

    ADJECTIVES = ("Tech", "Smart", "Digital", "Modern", "Future", "Global", "Elite", "Prime", "Advanced", "Innovative")
    NOUNS = ("Corp", "Systems", "Solutions", "Industries", "Enterprises", "Group", "Labs", "Works", "Hub", "Center")

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.SystemRandom()

    def generate(self) -> GeneratedCredentials:
        adjective = self.rng.choice(self.ADJECTIVES)
        noun = self.rng.choice(self.NOUNS)
        username = f"{adjective}{noun}{self.rng.randrange(100)}".lower()
        password = f"{username}@{self.rng.randrange(1000)}"
        return GeneratedCredentials(username=username, password=password)


default_generator = AdjectiveNounCredentialGenerator()
