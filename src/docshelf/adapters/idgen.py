from ..core.ident import Identifier
from ..core.ports import IdGenerator


class HexId(IdGenerator):
    def new_id(self) -> Identifier:
        return Identifier.generate()
