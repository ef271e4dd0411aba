import heapq
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

from loguru import logger

from errors import EmptyInputError


class HuffmanNode:
    """Node for a static binary Huffman tree.

    A node is a leaf when it has no children; only leaves carry a symbol.
    Internal nodes always own exactly two children.

    :ivar symbol: The symbol stored at a leaf; ``None`` for internal nodes.
    :type symbol: Hashable | None
    :ivar freq: Frequency (weight) of the subtree rooted at this node.
    :type freq: int
    :ivar left: Left child node (the ``'0'`` branch).
    :type left: HuffmanNode | None
    :ivar right: Right child node (the ``'1'`` branch).
    :type right: HuffmanNode | None
    :ivar order: Creation sequence number, used to break weight ties.
    :type order: int
    """

    __slots__ = ("symbol", "freq", "left", "right", "order")

    def __init__(self, symbol=None, freq=0, left=None, right=None, order=0):
        """Create a Huffman node.

        :param symbol: Symbol value for leaf nodes; ``None`` for internal nodes.
        :type symbol: Hashable | None
        :param int freq: Frequency (weight) associated with this node.
        :param left: Left child node, if any.
        :type left: HuffmanNode|None
        :param right: Right child node, if any.
        :type right: HuffmanNode|None
        :param int order: Tie-break sequence number.
        :returns: None
        :rtype: None
        """
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right
        self.order = order

    @property
    def is_leaf(self) -> bool:
        """``True`` for a node without children."""
        return self.left is None and self.right is None

    def __lt__(self, other):
        """Order nodes by frequency, then by creation order.

        :param other: Another node to compare with.
        :type other: HuffmanNode
        :returns: ``True`` if this node is extracted before ``other``.
        :rtype: bool
        """
        return (self.freq, self.order) < (other.freq, other.order)

    def __repr__(self):
        if self.is_leaf:
            return f"[{self.symbol!r},{self.freq}]"
        return f"[None,{self.freq}]({self.left!r},{self.right!r})"


def count_frequencies(data: Iterable[Hashable]) -> Dict[Hashable, int]:
    """Tally how often each distinct symbol occurs in ``data``.

    The returned table keeps the order in which symbols first appear,
    which is what :func:`build_tree` uses to break ties.

    :param data: Input symbols (a string, bytes, or any iterable of hashables).
    :type data: Iterable[Hashable]
    :returns: Mapping from symbol to occurrence count; empty for empty input.
    :rtype: Dict[Hashable, int]
    """
    frequencies: Dict[Hashable, int] = {}
    for symbol in data:
        frequencies[symbol] = frequencies.get(symbol, 0) + 1
    return frequencies


def build_tree(frequencies: Dict[Hashable, int]) -> HuffmanNode:
    """Build a Huffman tree by repeatedly merging the two lightest nodes.

    Ties between equal weights are broken by creation order: leaves are
    numbered in table order, and each merged node takes the next number,
    so it loses ties against every leaf and every older merged node. The
    first node popped from the heap becomes the left child.

    A table with a single entry yields a tree whose root is that leaf.

    :param frequencies: Mapping from symbol to a positive count.
    :type frequencies: Dict[Hashable, int]
    :returns: Root of the tree.
    :rtype: HuffmanNode
    :raises EmptyInputError: If ``frequencies`` is empty.
    :raises ValueError: If a count is not positive.
    """
    if not frequencies:
        raise EmptyInputError("Cannot build a Huffman tree without symbols")

    heap = []
    for order, (symbol, freq) in enumerate(frequencies.items()):
        if freq <= 0:
            raise ValueError(f"Invalid frequency {freq} for symbol {symbol!r}")
        heap.append(HuffmanNode(symbol=symbol, freq=freq, order=order))
    heapq.heapify(heap)

    next_order = len(heap)
    while len(heap) > 1:
        left = heapq.heappop(heap)
        right = heapq.heappop(heap)
        merged = HuffmanNode(
            freq=left.freq + right.freq, left=left, right=right, order=next_order
        )
        next_order += 1
        heapq.heappush(heap, merged)

    root = heap[0]
    logger.debug(
        f"[Huffman] Built tree: {len(frequencies)} leaves, weight {root.freq}"
    )
    return root


def assign_codes(root: HuffmanNode) -> Dict[Hashable, str]:
    """Walk the tree and record the root-to-leaf path of every symbol.

    A tree that is a single leaf gets the one-bit code ``"0"``, since an
    empty code cannot be told apart from zero occurrences.

    :param root: Root of a tree from :func:`build_tree` or :func:`load_tree`.
    :type root: HuffmanNode
    :returns: Mapping from symbol to a string of ``'0'``/``'1'`` digits.
    :rtype: Dict[Hashable, str]
    """
    if root.is_leaf:
        return {root.symbol: "0"}

    codes: Dict[Hashable, str] = {}

    def _walk(node: HuffmanNode, prefix: str):
        if node.is_leaf:
            codes[node.symbol] = prefix
        else:
            _walk(node.left, prefix + "0")
            _walk(node.right, prefix + "1")

    _walk(root, "")
    return codes


def dump_tree(root: HuffmanNode) -> List[Tuple[Hashable, int, int]]:
    """Serialize a tree as its leaves in pre-order.

    Each entry is ``(symbol, depth, weight)``. Depths alone fix the shape
    when read back in the same order, so this list is enough to rebuild the
    tree with :func:`load_tree`.

    :param root: Tree root.
    :type root: HuffmanNode
    :returns: Pre-order leaf entries.
    :rtype: List[Tuple[Hashable, int, int]]
    """
    entries = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if node.is_leaf:
            entries.append((node.symbol, depth, node.freq))
        else:
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
    return entries


def load_tree(entries: Sequence[Sequence]) -> HuffmanNode:
    """Rebuild a tree from the entries produced by :func:`dump_tree`.

    :param entries: Pre-order ``(symbol, depth, weight)`` leaf entries.
    :type entries: Sequence[Sequence]
    :returns: Root of the rebuilt tree.
    :rtype: HuffmanNode
    :raises EmptyInputError: If ``entries`` is empty.
    :raises ValueError: If the depths do not describe a strict binary tree.
    """
    if not entries:
        raise EmptyInputError("Tree metadata holds no symbols")

    # n leaves of a strict binary tree sit no deeper than n - 1
    max_depth = len(entries) - 1
    for symbol, leaf_depth, _ in entries:
        if leaf_depth > max_depth:
            raise ValueError(
                f"Invalid tree metadata: leaf {symbol!r} at depth {leaf_depth} "
                f"exceeds {max_depth}"
            )

    pos = 0
    order = 0

    def _load(depth: int) -> HuffmanNode:
        nonlocal pos, order
        if pos >= len(entries):
            raise ValueError("Invalid tree metadata: missing leaves")
        symbol, leaf_depth, weight = entries[pos]
        if leaf_depth < depth:
            raise ValueError(
                f"Invalid tree metadata: leaf {symbol!r} at depth {leaf_depth}"
            )
        if leaf_depth == depth:
            pos += 1
            node = HuffmanNode(symbol=symbol, freq=weight, order=order)
        else:
            left = _load(depth + 1)
            right = _load(depth + 1)
            node = HuffmanNode(
                freq=left.freq + right.freq, left=left, right=right, order=order
            )
        order += 1
        return node

    root = _load(0)
    if pos != len(entries):
        raise ValueError(
            f"Invalid tree metadata: {len(entries) - pos} unused entries"
        )
    return root
