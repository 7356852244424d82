from dataclasses import dataclass


@dataclass(frozen=True)
class Sample:
    input: str
    output: str
