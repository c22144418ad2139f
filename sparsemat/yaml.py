"""
Support for describing matrix-multiplication cases in YAML

Each case is a mapping of `desc`, dense operands `a` and `b`,
and optionally their dense `product`:

    - desc: identity
      a: [[1, 0], [0, 1]]
      b: [[5, 6], [7, 8]]
      product: [[5, 6], [7, 8]]
"""

from pathlib import Path
from typing import List, Optional, Tuple

import ruamel.yaml

from .matrix import SparseMatrix

yaml = ruamel.yaml.YAML()
yaml.default_flow_style = None


@yaml.register_class
class MatrixCase(object):
    yaml_tag = "!MatrixCase"

    def __init__(self, desc: str = "", a: Optional[List[List]] = None, b: Optional[List[List]] = None,
                 product: Optional[List[List]] = None):
        self.desc = desc
        self.a: List[List] = a or []
        self.b: List[List] = b or []
        self.product: Optional[List[List]] = product

    def __repr__(self):
        return f"<{self.__class__.__name__}(desc={self.desc!r})>"

    def to_dict(self):
        return dict(
            desc=self.desc,
            a=self.a,
            b=self.b,
            product=self.product,
        )

    @classmethod
    def to_yaml(cls, representer, node):
        return representer.represent_mapping(cls.yaml_tag, node.to_dict())

    @classmethod
    def from_yaml(cls, constructor, node):
        d = {constructor.construct_object(k, deep=True): constructor.construct_object(v, deep=True)
             for k, v in node.value}
        return cls.from_dict(d)

    @classmethod
    def from_dict(cls, d: dict):
        self = cls()
        self.desc = str(d['desc'])
        self.a = [list(row) for row in d['a']]
        self.b = [list(row) for row in d['b']]
        product = d.get('product')
        if product is not None:
            self.product = [list(row) for row in product]
        return self

    def to_mats(self) -> Tuple[SparseMatrix, SparseMatrix]:
        """ Convert operands to a pair of `SparseMatrix`.
        All-integer operands produce `int` matrices, others `float`. """
        return SparseMatrix.from_dense(self.a), SparseMatrix.from_dense(self.b)

    def expected(self) -> Optional[SparseMatrix]:
        if self.product is None:
            return None
        return SparseMatrix.from_dense(self.product)

    @classmethod
    def dump(cls, cases: List["MatrixCase"], file):
        p = Path(file)
        yaml.dump(list(cases), p)

    @classmethod
    def load(cls, file) -> List["MatrixCase"]:
        p = Path(file)
        y = yaml.load(p)
        if y is None:
            return []
        # Tagged `!MatrixCase` nodes load directly; untagged mappings are converted
        return [d if isinstance(d, cls) else cls.from_dict(d) for d in y]
