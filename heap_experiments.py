'''
    Experiments comparing the four heap variants.

    Each experiment runs one workload on all four combinations of
    consolidate_on_meld and cut_on_decrease, using the same random
    permutation of 1..n for every variant, and reports the counters of the
    final heap averaged over a number of iterations.

      1. Insert n keys in random order, then delete_min once.
      2. As 1, then delete the largest keys until 46 items remain.
      3. As 1, then decrease the 10% largest keys to 0, then delete_min.

    Usage: python heap_experiments.py [-n N] [-i ITERATIONS] [--seed SEED]
'''


import argparse
import logging
import random
import time

from hybrid_fibonacci_heaps import Heap


log = logging.getLogger(__name__)

N = 464646
NUM_ITERATIONS = 20
REMAINING = 46  # items left by experiment 2

# name: (consolidate_on_meld, cut_on_decrease)
VARIANTS = {
    'Regular Binomial': (True, False),
    'Lazy Binomial': (False, False),
    'Fibonacci': (False, True),
    'Binomial with Cuts': (True, True),
}

DESCRIPTIONS = {
    1: 'Insert n elements in random order, then delete_min() once',
    2: f'Insert n elements, delete_min(), delete max keys until '
       f'{REMAINING} elements remain',
    3: 'Insert n elements, delete_min(), decrease_key to 0 for 10% largest, '
       'delete_min() again',
}


def random_permutation(n, rng=random):
    '''Return a random permutation of 1..n as a list.'''

    permutation = list(range(1, n + 1))
    rng.shuffle(permutation)
    return permutation


class ExperimentResult:
    '''Counters of one run, or the sum or average of several runs.'''

    FIELDS = ('execution_time', 'final_size', 'num_trees', 'total_links',
              'total_cuts', 'total_heapify_costs', 'max_operation_cost')

    def __init__(self, **counters):
        for field in ExperimentResult.FIELDS:
            setattr(self, field, counters.pop(field, 0))
        assert not counters, f'unknown counters {sorted(counters)}'

    def add(self, other):
        '''Add the counters of other to this result.'''

        for field in ExperimentResult.FIELDS:
            setattr(self, field, getattr(self, field) + getattr(other, field))

    def divide_by(self, divisor):
        '''Integer divide all counters by divisor.'''

        for field in ExperimentResult.FIELDS:
            setattr(self, field, getattr(self, field) // divisor)

    def as_tuple(self):
        return tuple(getattr(self, field) for field in ExperimentResult.FIELDS)

    def __repr__(self):
        counters = ', '.join(f'{field}={getattr(self, field)}'
                             for field in ExperimentResult.FIELDS)
        return f'ExperimentResult({counters})'


class CostTracker:
    '''Track the most expensive operation on a heap.

    The cost of an operation is the number of links, cuts and heapify swaps
    it performed.
    '''

    def __init__(self, heap):
        self.heap = heap
        self.max_cost = 0

    def _work(self):
        heap = self.heap
        return heap.total_links() + heap.total_cuts() + heap.total_heapify_costs()

    def run(self, operation, *args):
        '''Apply operation(*args) and record its cost. Returns its result.'''

        before = self._work()
        result = operation(*args)
        self.max_cost = max(self.max_cost, self._work() - before)
        return result


def insert_all(heap, tracker, permutation):
    '''Insert all keys, return the list items where items[key] has key.'''

    items = [None] * (len(permutation) + 1)
    for key in permutation:
        items[key] = tracker.run(heap.insert, key, '')
    return items


def run_experiment_1(consolidate_on_meld, cut_on_decrease, permutation):
    '''Insert all keys, then delete_min once.'''

    start = time.perf_counter()
    heap = Heap(consolidate_on_meld, cut_on_decrease)
    tracker = CostTracker(heap)
    insert_all(heap, tracker, permutation)
    tracker.run(heap.delete_min)
    return collect_result(heap, tracker, start)


def run_experiment_2(consolidate_on_meld, cut_on_decrease, permutation):
    '''Insert all keys, delete_min, then delete the largest keys.'''

    start = time.perf_counter()
    heap = Heap(consolidate_on_meld, cut_on_decrease)
    tracker = CostTracker(heap)
    items = insert_all(heap, tracker, permutation)
    tracker.run(heap.delete_min)
    items[1] = None
    key = len(permutation)
    while heap.size() > REMAINING and key > 0:
        if items[key] is not None:
            tracker.run(heap.delete, items[key])
            items[key] = None
        key -= 1
    return collect_result(heap, tracker, start)


def run_experiment_3(consolidate_on_meld, cut_on_decrease, permutation):
    '''Insert all keys, delete_min, decrease the 10% largest keys to 0,
    and delete_min again.'''

    start = time.perf_counter()
    heap = Heap(consolidate_on_meld, cut_on_decrease)
    tracker = CostTracker(heap)
    items = insert_all(heap, tracker, permutation)
    tracker.run(heap.delete_min)
    items[1] = None
    n = len(permutation)
    for key in range(n - n // 10 + 1, n + 1):
        item = items[key]
        if item is not None:
            tracker.run(heap.decrease_key, item, item.key)
    tracker.run(heap.delete_min)
    return collect_result(heap, tracker, start)


EXPERIMENTS = {
    1: run_experiment_1,
    2: run_experiment_2,
    3: run_experiment_3,
}


def collect_result(heap, tracker, start):
    '''Create the result for a finished run started at time start.'''

    return ExperimentResult(
        execution_time=int((time.perf_counter() - start) * 1000),
        final_size=heap.size(),
        num_trees=heap.num_trees(),
        total_links=heap.total_links(),
        total_cuts=heap.total_cuts(),
        total_heapify_costs=heap.total_heapify_costs(),
        max_operation_cost=tracker.max_cost,
    )


def run_experiments(n=N, iterations=NUM_ITERATIONS, experiments=(1, 2, 3),
                    rng=random, progress=False):
    '''Run experiments, return {experiment: {variant: averaged result}}.'''

    assert n >= 1
    assert iterations >= 1

    results = {}
    for experiment in experiments:
        run = EXPERIMENTS[experiment]
        log.debug('experiment %d: n=%d, iterations=%d', experiment, n,
                  iterations)
        if progress:
            print(f'Experiment {experiment} ', end='', flush=True)
        totals = {name: ExperimentResult() for name in VARIANTS}
        for iteration in range(1, iterations + 1):
            permutation = random_permutation(n, rng)
            for name, (consolidate_on_meld, cut_on_decrease) in VARIANTS.items():
                result = run(consolidate_on_meld, cut_on_decrease, permutation)
                log.debug('experiment %d, iteration %d, %s: %r', experiment,
                          iteration, name, result)
                totals[name].add(result)
            if progress:
                print('.', end='', flush=True)
        if progress:
            print()
        for total in totals.values():
            total.divide_by(iterations)
        results[experiment] = totals
    return results


HEADERS = ('Heap Type', 'Time (ms)', 'Final Size', 'Num Trees', 'Total Links',
           'Total Cuts', 'Total Heapify', 'Max Op Cost')
WIDTHS = (20, 12, 10, 10, 12, 12, 16, 14)


def format_table(results):
    '''Format {variant: result} as a boxed table, one row per variant.'''

    rule = '+' + '+'.join('-' * (width + 2) for width in WIDTHS) + '+'
    header = '| ' + ' | '.join(f'{title:<{width}}'
                               for title, width in zip(HEADERS, WIDTHS)) + ' |'
    lines = [rule, header, rule]
    for name, result in results.items():
        cells = [f'{name:<{WIDTHS[0]}}']
        cells += [f'{value:>{width}d}'
                  for value, width in zip(result.as_tuple(), WIDTHS[1:])]
        lines.append('| ' + ' | '.join(cells) + ' |')
    lines.append(rule)
    return '\n'.join(lines)


def main(argv=None):
    '''Run the experiments from the command line and print the tables.'''

    parser = argparse.ArgumentParser(
        description='Compare Fibonacci and binomial heap variants.')
    parser.add_argument('-n', type=int, default=N,
                        help='number of keys inserted (default %(default)s)')
    parser.add_argument('-i', '--iterations', type=int, default=NUM_ITERATIONS,
                        help='iterations averaged (default %(default)s)')
    parser.add_argument('-e', '--experiment', type=int, action='append',
                        choices=sorted(EXPERIMENTS),
                        help='experiment to run, can be repeated (default all)')
    parser.add_argument('--seed', type=int, default=None,
                        help='seed for the random permutations')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log every run')
    args = parser.parse_args(argv)
    if args.n < 1 or args.iterations < 1:
        parser.error('n and iterations must be positive')

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    experiments = args.experiment or sorted(EXPERIMENTS)
    rng = random.Random(args.seed)

    print('=' * 80)
    print('HEAP EXPERIMENT RUNNER')
    print('n =', args.n, ', iterations =', args.iterations)
    print('=' * 80)
    results = run_experiments(args.n, args.iterations, experiments, rng,
                              progress=True)
    for experiment in experiments:
        print()
        print(f'EXPERIMENT {experiment}: {DESCRIPTIONS[experiment]}')
        print(f'Results (averaged over {args.iterations} iterations):')
        print(format_table(results[experiment]))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
