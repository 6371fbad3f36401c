from pydantic import BaseModel


class OutputBinding(BaseModel):
    """A task connected to the shared input container and its own output container."""

    task_name: str
    input_container: str
    output_container: str
    output_file: str
    input_slot: int = 0
    output_slot: int = 1
