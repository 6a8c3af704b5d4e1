from dataclasses import dataclass, asdict

@dataclass
class CreateUserInput:
    name: str
    email: str

    def as_fields(self) -> dict:
        return asdict(self)
