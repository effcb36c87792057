import numpy as np, pytest
from mlswarp.deform.weights import inverse_distance_weights, weighted_centroids
from mlswarp.deform.affine import deform_affine
from mlswarp.deform.similarity import deform_similarity
from mlswarp.deform.rigid import deform_rigid

P = np.array([[0,0],[2,0]], dtype=float)

def test_inverse_squared_distance():
    ws = inverse_distance_weights(P, np.array([[1.0,0.0],[0.0,3.0]]))
    # d = (1, 1) and (9, 13), scaled by the nearest control
    assert np.allclose(ws.w, [[1,1],[1,9/13]])
    assert (ws.coincident == -1).all()

def test_alpha_exponent():
    ws = inverse_distance_weights(P, np.array([[0.0,3.0]]), alpha=2.0)
    assert np.allclose(ws.w, [[1,81/169]])
    with pytest.raises(ValueError):
        inverse_distance_weights(P, np.array([[0.0,3.0]]), alpha=0)

def test_coincident_index():
    ws = inverse_distance_weights(P, np.array([[2.0,0.0],[1.0,1.0],[0.0,0.0]]))
    assert list(ws.coincident) == [1,-1,0]
    assert np.isfinite(ws.w).all()

def test_very_close_query_is_not_coincident():
    ws = inverse_distance_weights(P, np.array([[1e-100,0.0]]), alpha=2.0)
    assert list(ws.coincident) == [-1]
    assert ws.w[0,0] == 1.0 and ws.w[0,1] == 0.0

def test_far_query_with_large_alpha_stays_finite():
    src = [(0,0),(10,0),(0,10)]; dst = [(1,0),(11,0),(0,12)]
    ws = inverse_distance_weights(np.array(src, dtype=float), np.array([[1000.0,1000.0]]), alpha=60)
    assert np.isfinite(ws.w).all() and ws.w.max() == 1.0
    for solver in (deform_affine, deform_similarity, deform_rigid):
        assert np.isfinite(solver(src, dst, (1000,1000), alpha=60)).all()

def test_centroids():
    q = np.array([[0,0],[0,4]], dtype=float)
    ws = inverse_distance_weights(P, np.array([[0.5,0.0]]))  # d = 0.25, 2.25
    p_star, q_star = weighted_centroids(ws, P, q)
    assert np.allclose(p_star, [[0.2,0.0]])
    assert np.allclose(q_star, [[0.0,0.4]])
