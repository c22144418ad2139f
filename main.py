"""
Demonstration: build two small sparse matrices and multiply them.
"""

from sparsemat import SparseMatrix


def demo_multiply():
    a = SparseMatrix(2, 3, dtype=int)
    b = SparseMatrix(3, 2, dtype=int)

    a.set_element(0, 0, 1)
    a.set_element(0, 2, 2)
    a.set_element(1, 1, 3)

    b.set_element(0, 1, 4)
    b.set_element(1, 0, 5)
    b.set_element(2, 1, 6)

    print('***MATRICES***')
    print(a)
    print(b)
    print('*STARTING PROCESS...*')
    c = a.multiply(b)
    print('DONE:')
    c.render()
    print(f'{c.non_zero_count()} non-zero entries')
    print(c.display())


def main():
    demo_multiply()


if __name__ == '__main__':
    main()
