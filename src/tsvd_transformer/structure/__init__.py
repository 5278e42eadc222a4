from .infer import truncated_svd as truncated_svd
