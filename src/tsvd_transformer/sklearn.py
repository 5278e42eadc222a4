import numpy as np

from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .transformer import TSVDResult, TSVDTransformer


def _as_rng(random_state):
    # draw a seed so that a RandomState advances on each fit
    if isinstance(random_state, np.random.RandomState):
        return int(random_state.randint(np.iinfo(np.int32).max))
    return random_state


class LanczosTruncatedSVD(TransformerMixin, BaseEstimator):
    """scikit-learn estimator backed by `TSVDTransformer`.

    `components_` follows the scikit-learn orientation `(n_components,
    n_features)`; the adapter's own `fitresult_` keeps the
    `(n_features, n_components)` layout.

    `random_state` may be an integer seed, a `numpy.random.Generator`, a
    `numpy.random.RandomState` (a seed is drawn from it on each `fit`) or
    `None` for the process-wide generator.
    """

    def __init__(self, n_components=2, n_iter=1000, random_state=123):
        self.n_components = n_components
        self.n_iter = n_iter
        self.random_state = random_state

    def _model(self, random_state=None) -> TSVDTransformer:
        return TSVDTransformer(nvals=self.n_components, maxiter=self.n_iter, rng=random_state)

    def fit(self, X, y=None):
        model = self._model(_as_rng(self.random_state))
        fitresult, _, _ = model.fit(X)
        self.fitresult_: TSVDResult = fitresult
        self.components_ = fitresult.components.T
        self.singular_values_ = fitresult.singular_values
        self.n_features_in_ = fitresult.n_features
        return self

    def transform(self, X):
        check_is_fitted(self, "fitresult_")
        return self._model().transform(self.fitresult_, X)

    def inverse_transform(self, X):
        check_is_fitted(self, "fitresult_")
        return self._model().inverse_transform(self.fitresult_, X)
