"""Remote service gateways."""

from .datapipeline_gateway import DataPipelineGateway

__all__ = ["DataPipelineGateway"]
