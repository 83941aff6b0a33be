# Matrix4 - 4x4 homogeneous matrix algebra
#
# Matrices are lists of four rows, vectors are lists of four
# components.  result = M . v for a column vector v.  Every
# function returns a new list and never touches its inputs.

import math


def identity():
    """Return the 4x4 identity matrix."""
    return [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def multiply(A, B):
    """Matrix product A . B.

    Args:
        A: Left 4x4 matrix.
        B: Right 4x4 matrix.

    Returns:
        New 4x4 matrix with result[i][j] = sum_k A[i][k] * B[k][j].
    """
    result = [[0.0] * 4 for _ in range(4)]
    for i in range(4):
        row = A[i]
        out = result[i]
        for j in range(4):
            s = 0.0
            for k in range(4):
                s += row[k] * B[k][j]
            out[j] = s
    return result


def multiply_vector(M, v):
    """Apply M to the homogeneous column vector v.

    Returns:
        New 4-component list with result[i] = sum_j M[i][j] * v[j].
    """
    result = [0.0, 0.0, 0.0, 0.0]
    for i in range(4):
        row = M[i]
        s = 0.0
        for j in range(4):
            s += row[j] * v[j]
        result[i] = s
    return result


def translation(dx, dy, dz):
    return [
        [1.0, 0.0, 0.0, dx],
        [0.0, 1.0, 0.0, dy],
        [0.0, 0.0, 1.0, dz],
        [0.0, 0.0, 0.0, 1.0],
    ]


def scale(k):
    """Uniform scale by k (w is left untouched)."""
    return [
        [k, 0.0, 0.0, 0.0],
        [0.0, k, 0.0, 0.0],
        [0.0, 0.0, k, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def rotate_x(theta):
    """Right-handed rotation about X, theta in degrees."""
    rad = math.radians(theta)
    c = math.cos(rad)
    s = math.sin(rad)
    return [
        [1.0, 0.0, 0.0, 0.0],
        [0.0, c, -s, 0.0],
        [0.0, s, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def rotate_y(theta):
    """Right-handed rotation about Y, theta in degrees."""
    rad = math.radians(theta)
    c = math.cos(rad)
    s = math.sin(rad)
    return [
        [c, 0.0, s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [-s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def rotate_z(theta):
    """Right-handed rotation about Z, theta in degrees."""
    rad = math.radians(theta)
    c = math.cos(rad)
    s = math.sin(rad)
    return [
        [c, -s, 0.0, 0.0],
        [s, c, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def copy(M):
    return [list(row) for row in M]


def is_close(A, B, tol=1e-9):
    """Element-wise comparison of two 4x4 matrices within tol."""
    for i in range(4):
        for j in range(4):
            if abs(A[i][j] - B[i][j]) > tol:
                return False
    return True
