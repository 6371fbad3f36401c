from pydantic import BaseModel


class InputChain(BaseModel):
    """Ordered list of input files read through one tree."""

    tree_name: str
    files: list[str] = []

    def __len__(self) -> int:
        return len(self.files)
