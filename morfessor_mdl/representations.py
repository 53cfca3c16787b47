class Morph(tuple):
    """An immutable (letters, frequency) record.

    Used for the words read from a corpus and for the morphs (leaves)
    reported by a segmentation tree. Compares and sorts like a tuple,
    so sorting a list of Morphs orders them by their letters.
    """
    __slots__ = ()

    def __new__(cls, letters, frequency=1):
        """Initialize by storing the letters and the corpus frequency"""
        if frequency < 0:
            raise ValueError("Morph frequency cannot be negative: %r" % (frequency,))
        return tuple.__new__(cls, (letters, frequency))

    def __repr__(self):
        """Provides a string representation of the object"""
        return "{}({!r}, {})".format(type(self).__name__, self.letters, self.frequency)

    def __str__(self):
        """For strings, use the letters"""
        return self.letters

    def __getnewargs__(self):
        """Arguments for unpickling"""
        return tuple(self)

    @property
    def letters(self):
        return self[0]

    @property
    def frequency(self):
        return self[1]

    @property
    def length(self):
        """The number of letters in the morph"""
        return len(self[0])


class SplitNode(object):
    """A node in the segmentation tree.

    The count is the number of corpus tokens whose segmentation passes
    through this string. The children are the keys of two other nodes
    in the same tree; they are either both set or both None. A node
    without children is a leaf (a morph in the lexicon).
    """
    __slots__ = ('count', 'left_child', 'right_child')

    def __init__(self, count=0, left_child=None, right_child=None):
        """Initialize the node; the default is a leaf with no count"""
        if (left_child is None) != (right_child is None):
            raise ValueError("A split node needs both children or neither")
        self.count = count
        self.left_child = left_child
        self.right_child = right_child

    def __repr__(self):
        """Provides a string representation of the object"""
        cls_name = type(self).__name__
        if self.has_children:
            return "{}({}, {!r}, {!r})".format(cls_name, self.count, self.left_child, self.right_child)
        return "{}({})".format(cls_name, self.count)

    def __eq__(self, other):
        """For object equality, compare the attributes"""
        return type(self) == type(other) and all(
            getattr(self, attr) == getattr(other, attr) for attr in self.__slots__)

    # Mutable, and hence unhashable
    __hash__ = None

    def __copy__(self):
        """A method for copying, to improve speed"""
        return SplitNode(self.count, self.left_child, self.right_child)

    def __getstate__(self):
        return (self.count, self.left_child, self.right_child)

    def __setstate__(self, state):
        self.count, self.left_child, self.right_child = state

    @property
    def has_children(self):
        """Checks if the node is split"""
        return self.left_child is not None

    def get_children(self):
        """Returns the (left, right) child keys, or an empty tuple for a leaf"""
        if self.has_children:
            return (self.left_child, self.right_child)
        return ()
