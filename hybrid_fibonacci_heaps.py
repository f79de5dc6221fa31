'''
    Fibonacci heaps with configurable meld and decrease-key strategies.

    Two switches, fixed when a heap is created, select its behaviour:

      - consolidate_on_meld: an eager meld links equal rank trees right
        after splicing the root lists (the binomial heap discipline),
        a lazy meld only splices and leaves linking to delete_min.
      - cut_on_decrease: a node whose key is decreased below its parent's
        key is cut and cascading cuts follow (the Fibonacci heap
        discipline), otherwise items are swapped upwards in place until
        heap order is restored.

    Combining the two switches gives the Fibonacci heap, the binomial heap,
    the lazy binomial heap, and the binomial heap with cuts, all sharing the
    same forest of heap ordered trees in circular doubly linked lists.

    Keys are positive integers. Preconditions are only checked by
    assertions, heap.validate() checks the complete structure.
'''


import math


PHI = (1 + math.sqrt(5)) / 2  # golden ratio, bounds ranks by log_phi(size)


class Heap:
    '''A pointer based meldable heap over positive integer keys.

    The class supports the following operations:

      - Heap(consolidate_on_meld, cut_on_decrease) creates an empty heap.
      - H.empty() returns if the heap H is empty.
      - H.find_min() returns the item in H with minimum key (None if empty).
      - H.insert(key, value) creates an item (key, value) in H, returns it.
      - H.delete_min() deletes the item with minimum key (no-op if empty).
      - H.decrease_key(x, diff) decreases the key of item x by diff.
      - H.delete(x) deletes item x from H.
      - H1.meld(H2) moves all items of H2 into H1. H2 cannot be used again.

    The counters size(), num_trees(), num_marked_nodes(), total_links(),
    total_cuts() and total_heapify_costs() are read in O(1) time.

    Insert, FindMin, DecreaseKey and lazy Meld take amortized O(1) time,
    DeleteMin and Delete amortized O(log n) time. Eager melds consolidate
    and cost O(log n) amortized, and so do heapify decrease keys.
    '''

    def __init__(self, consolidate_on_meld=False, cut_on_decrease=True):
        '''Initialize a new empty heap. The flags cannot change later.'''

        self._consolidate_on_meld = consolidate_on_meld
        self._cut_on_decrease = cut_on_decrease
        if cut_on_decrease:
            self._propagate = self._cascading_cut
        else:
            self._propagate = self._heapify_up
        self._active = True
        # root list
        self._min = None  # item with minimum key
        self._head = None
        self._tail = None
        # counters
        self._size = 0
        self._num_trees = 0
        self._num_marked = 0
        self._total_links = 0
        self._total_cuts = 0
        self._total_heapify_costs = 0

    @property
    def consolidate_on_meld(self):
        return self._consolidate_on_meld

    @property
    def cut_on_decrease(self):
        return self._cut_on_decrease

    def empty(self):
        '''Return if heap is empty.'''

        assert self._active

        return self._size == 0

    def find_min(self):
        '''Return the item with the smallest key, or None if empty.'''

        assert self._active

        return self._min

    def insert(self, key, value=None):
        '''Insert new (key, value) item into heap. Returns the item.'''

        assert self._active
        assert key > 0

        item = Item(key, value)
        node = Node(item)
        self._meld_roots(node, node, 1, 1, item)
        return item

    def delete_min(self):
        '''Delete the item with minimum key. Does nothing if empty.'''

        assert self._active

        item = self._min
        if item is None:
            return
        node = item._node
        if self._size == 1:
            assert node._child is None
            self._min = None
            self._head = None
            self._tail = None
            self._size = 0
            self._num_trees = 0
            node.retire()
            return

        # Remove node from the root list
        if self._num_trees == 1:
            self._head = None
            self._tail = None
        else:
            node._prev._next = node._next
            node._next._prev = node._prev
            if self._head is node:
                self._head = node._next
            if self._tail is node:
                self._tail = node._prev
        self._size -= 1
        self._num_trees -= 1
        self._min = None

        # Children become unmarked roots
        child = node._child
        if child is not None:
            for promoted in node.children():
                promoted._parent = None
                if promoted._marked:
                    promoted._marked = False
                    self._num_marked -= 1
            self._splice(child, child._prev, node._rank, 0, None)
            node._child = None
            node._rank = 0
        node.retire()

        # Link equal rank trees, independent of consolidate_on_meld
        if self._size > 1:
            self._consolidate()
        else:
            self._min = self._head._item

    def decrease_key(self, item, diff):
        '''Decrease the key of item by diff, where 0 <= diff <= item.key.'''

        assert self._active
        assert not item.retired()
        assert 0 <= diff <= item.key

        item.key -= diff
        if item.key < self._min.key:
            self._min = item
        self._propagate(item)

    def delete(self, item):
        '''Delete item from this heap. Does nothing if the heap is empty.'''

        assert self._active

        if self._min is None:
            return

        assert not item.retired()

        self._drive_to_minimum(item)
        self.delete_min()

    def meld(self, other):
        '''Move all items of other into this heap. Deactivates other.'''

        assert self._active and other._active
        assert other is not self
        assert other._consolidate_on_meld == self._consolidate_on_meld
        assert other._cut_on_decrease == self._cut_on_decrease

        other._active = False
        if other._head is None:
            return
        head, tail, min_item = other._head, other._tail, other._min
        num_trees, size = other._num_trees, other._size
        self._num_marked += other._num_marked
        self._total_links += other._total_links
        self._total_cuts += other._total_cuts
        self._total_heapify_costs += other._total_heapify_costs
        other._min = None
        other._head = None
        other._tail = None
        other._size = 0
        other._num_trees = 0
        other._num_marked = 0
        self._meld_roots(head, tail, num_trees, size, min_item)

    ##################################################################
    #                          Counters
    ##################################################################

    def size(self):
        '''Return the number of items in the heap.'''

        return self._size

    def num_trees(self):
        '''Return the number of trees in the root list.'''

        return self._num_trees

    def num_marked_nodes(self):
        '''Return the number of marked nodes.'''

        return self._num_marked

    def total_links(self):
        '''Return the number of links performed so far.'''

        return self._total_links

    def total_cuts(self):
        '''Return the number of cuts performed so far.'''

        return self._total_cuts

    def total_heapify_costs(self):
        '''Return the number of item swaps performed by heapify so far.'''

        return self._total_heapify_costs

    ##################################################################
    #                       Root list and linking
    ##################################################################

    def _splice(self, head, tail, num_trees, size, min_item):
        '''Append the root cycle head..tail to the root list.

        min_item is the item with minimum key in the appended cycle, or None
        if the caller recomputes the minimum afterwards.
        '''

        if self._head is None:
            self._head = head
            self._tail = tail
            self._min = min_item
        else:
            self._tail._next = head
            head._prev = self._tail
            tail._next = self._head
            self._head._prev = tail
            self._tail = tail
            if (min_item is not None and
                (self._min is None or min_item.key < self._min.key)):
                self._min = min_item
        self._size += size
        self._num_trees += num_trees

    def _meld_roots(self, head, tail, num_trees, size, min_item):
        '''Splice a root cycle into the root list, consolidate if eager.'''

        was_empty = self._head is None
        self._splice(head, tail, num_trees, size, min_item)
        if self._consolidate_on_meld and not was_empty:
            self._consolidate()

    def _link(self, x, y):
        '''Link two roots of equal rank. Return the winner (parent of other).'''

        assert x is not y
        assert x._rank == y._rank
        assert x._parent is None and y._parent is None

        if y._item.key < x._item.key:
            x, y = y, x
        child = x._child
        if child is None:
            y._next = y
            y._prev = y
        else:
            y._next = child._next
            y._prev = child
            child._next._prev = y
            child._next = y
        x._child = y
        y._parent = x
        x._rank += 1

        return x

    def _consolidate(self):
        '''Link roots until all ranks are distinct. Rebuilds the root list.'''

        if self._size <= 1:
            return

        bucket = [None] * (2 * (math.ceil(math.log(self._size, PHI)) + 1))

        # Break the root cycle and put every root into the bucket of its rank
        self._tail._next = None
        node = self._head
        while node is not None:
            root = node
            node = node._next
            root._next = root
            root._prev = root
            while bucket[root._rank] is not None:
                other = bucket[root._rank]
                bucket[root._rank] = None
                root = self._link(root, other)
                self._total_links += 1
            bucket[root._rank] = root

        # Rebuild the root list in rank order and find the new minimum
        head = None
        self._num_trees = 0
        self._min = None
        for root in bucket:
            if root is None:
                continue
            self._num_trees += 1
            if head is None:
                head = root
            else:
                root._next = head
                root._prev = head._prev
                head._prev._next = root
                head._prev = root
            if self._min is None or root._item.key < self._min.key:
                self._min = root._item
        self._head = head
        self._tail = head._prev

    ##################################################################
    #                        Decrease key
    ##################################################################

    def _cut(self, node, parent):
        '''Cut node from parent and meld it into the root list.'''

        assert node._parent is parent

        self._total_cuts += 1
        node._parent = None
        if node._marked:
            node._marked = False
            self._num_marked -= 1
        parent._rank -= 1
        if node._next is node:
            parent._child = None
        else:
            parent._child = node._next
            node._prev._next = node._next
            node._next._prev = node._prev
            node._next = node
            node._prev = node
        self._meld_roots(node, node, 1, 0, node._item)

    def _cascading_cut(self, item):
        '''Restore heap order at item by cutting, with cascading cuts.'''

        node = item._node
        parent = node._parent
        if parent is None or parent._item.key <= item.key:
            return
        while True:
            grandparent = parent._parent  # before an eager meld moves roots
            self._cut(node, parent)
            if grandparent is None:
                return  # parent is a root, roots are never marked
            if not parent._marked:
                parent._marked = True
                self._num_marked += 1
                return
            node, parent = parent, grandparent

    def _heapify_up(self, item):
        '''Restore heap order at item by swapping items with ancestors.'''

        node = item._node
        parent = node._parent
        while parent is not None and item.key < parent._item.key:
            other = parent._item
            parent._item = item
            node._item = other
            item._node = parent
            other._node = node
            self._total_heapify_costs += 1
            node, parent = parent, parent._parent
        if item.key < self._min.key:
            self._min = item

    def _drive_to_minimum(self, item):
        '''Give item a key below all other keys and restore heap order.'''

        item.key = self._min.key - 1
        self._min = item
        self._propagate(item)

    ##################################################################
    #                        Traversal
    ##################################################################

    def roots(self):
        '''Generator to return all roots, starting at the head.'''

        root = self._head
        if root is not None:
            yield root
            while root._next is not self._head:
                root = root._next
                yield root

    def nodes(self):
        '''Generator to yield all nodes in the heap.'''

        for root in self.roots():
            yield from root.all_nodes()

    ##################################################################
    #                      Validation methods
    ##################################################################

    def validate(self):
        '''Validate all heap structure and invariants.'''

        heap = self

        def validate_cycle(first, count):
            '''Validate cyclic _next and _prev links of count nodes.'''

            node = first
            for _ in range(count):
                assert node._next._prev is node
                assert node._prev._next is node
                node = node._next
            assert node is first  # exactly count steps

        def validate_tree(root):
            '''Validate tree nodes. Returns (nodes, marked).'''

            nodes = marked = 0
            stack = [(root, None)]  # trees can be as deep as they are large
            while stack:
                node, parent = stack.pop()
                item = node._item
                # Validate item and node reference each other
                assert item is not None
                assert item._node is node
                # Validate parent pointer and heap order
                assert node._parent is parent
                if parent is not None:
                    assert parent._item.key <= item.key
                # Marks only on non-roots, and only when cutting
                if node._marked:
                    assert parent is not None
                    assert heap._cut_on_decrease
                # Validate child cycle and rank
                if node._child is None:
                    assert node._rank == 0
                else:
                    validate_cycle(node._child, node._rank)
                nodes += 1
                marked += node._marked
                stack.extend((child, node) for child in node.children())
            return nodes, marked

        assert heap._active
        assert heap._size >= 0
        assert heap._num_marked >= 0
        assert heap._total_links >= 0
        assert heap._total_cuts >= 0
        assert heap._total_heapify_costs >= 0
        if heap._size == 0:
            assert heap._head is None
            assert heap._tail is None
            assert heap._min is None
            assert heap._num_trees == 0
            assert heap._num_marked == 0
        else:
            assert heap._head is not None
            assert heap._tail is heap._head._prev
            assert heap._min is not None
            validate_cycle(heap._head, heap._num_trees)
            size = marked = 0
            for root in heap.roots():
                root_nodes, root_marked = validate_tree(root)
                size += root_nodes
                marked += root_marked
            assert size == heap._size
            assert marked == heap._num_marked
            assert heap._min._node is not None
            assert heap._min.key == min(node._item.key for node in heap.nodes())
            # Rank bound used for the consolidation bucket
            bound = math.log(heap._size, PHI) + 1 if heap._size > 1 else 1
            assert all(node._rank <= bound for node in heap.nodes())

    ##################################################################
    #                        Save heap as LaTeX
    ##################################################################

    def latex(self, filename='heap_figure.tex', show_keys=False):
        '''Save heap as a LaTeX figure using the forest package.'''

        heap = self

        assert heap._active
        assert heap._size > 0

        def traverse(root, indent=2):
            '''Convert subtree rooted at root to Latex with indentation.'''

            lines = []
            stack = [(root, indent)]  # a str entry closes a subtree
            while stack:
                entry = stack.pop()
                if isinstance(entry, str):
                    lines.append(entry)
                    continue
                node, indent = entry
                key = str(node._item.key) if show_keys else ''
                txt = r'\NODE{' + str(node._rank) + '}{' + key + '}'
                if node._marked:
                    txt += ', marked'
                if node._child is None:
                    lines.append(' ' * indent + '[ ' + txt + ' ]\n')
                else:
                    lines.append(' ' * indent + '[ ' + txt + '\n')
                    stack.append(' ' * indent + ']\n')
                    stack.extend((child, indent + 2)
                                 for child in reversed(list(node.children())))
            return ''.join(lines)

        forest = ''.join(traverse(root) for root in heap.roots())
        txt = r'''\documentclass[margin=15pt]{standalone}
\usepackage{forest}
\begin{document}
\forestset{forest circles/.style={
    for tree={math content, draw, circle,
      inner sep=0pt, outer sep=0cm, anchor=center,
      minimum size=16pt, font=\scriptsize,
      l=25pt, s sep=20pt, edge=solid},
    phantom/.style={draw=none, minimum size=0pt, for children={no edge}},
    marked/.style={fill=black!15}
  }
}
\newcommand{\NODE}[2]{\makebox[0cm][c]{#1}\rlap{\hspace{1.5em}\tiny #2}}
\begin{forest}
  forest circles,
  [ , phantom
''' + forest + r'''  ]
\end{forest}
\end{document}
'''
        with open(filename, 'w') as file:
            print(txt, file=file)


######################################################################
#                      Node and item records
######################################################################


class Node:
    '''A tree node holding one item. Nodes never leave their heap.'''

    def __init__(self, item):
        '''Create a root of rank zero for a new item.'''

        self._item = item
        item._node = self
        # tree structure
        self._parent = None
        self._child = None  # any child, children form a cycle
        self._next = self  # no sibling
        self._prev = self  # no sibling
        # state
        self._rank = 0
        self._marked = False

    def retire(self):
        '''Disconnect this single node and its item.'''

        assert self._parent is None
        assert self._child is None

        self._item._node = None
        self._item = None
        self._next = None
        self._prev = None

    def children(self):
        '''Generator to return all children of node.'''

        child = self._child
        if child is not None:
            yield child
            while child._next is not self._child:
                child = child._next
                yield child

    def all_nodes(self):
        '''Generator to yield all nodes in subtree rooted at node.'''

        stack = [self]  # preorder, trees can be as deep as they are large
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))

    def height(self):
        '''Return height of subtree rooted at node.'''

        height = 0
        level = [self]
        while level:
            height += 1
            level = [child for node in level for child in node.children()]
        return height


class Item:
    '''A (key, value) pair in a heap, the handle returned by insert.'''

    def __init__(self, key, value):
        self.key = key
        self.value = value
        self._node = None

    def item(self):
        '''Return the pair (key, value).'''

        return (self.key, self.value)

    def retired(self):
        '''Return if the item has been deleted from its heap.'''

        return self._node is None

    def __repr__(self):
        return f'Item({self.key!r}, {self.value!r})'
