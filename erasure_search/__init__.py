"""Search for the best random code under the binary erasure channel."""

from erasure_search.best_code_finder import BestCodeFinderUsingErasure, CodeAndResult
from erasure_search.erasure_decoder import ErasureDecoder
from erasure_search.generators import CodeGenerator, RegularLDPCCodeGenerator
from erasure_search.parity_check_matrix import ParityCheckMatrix, RowSlice
from erasure_search.simulation import SimulationResult
from erasure_search.stopping_policies import BalancedEvents, Decoder, FixedIterations, StoppingPolicy

__all__ = [
    "BalancedEvents",
    "BestCodeFinderUsingErasure",
    "CodeAndResult",
    "CodeGenerator",
    "Decoder",
    "ErasureDecoder",
    "FixedIterations",
    "ParityCheckMatrix",
    "RegularLDPCCodeGenerator",
    "RowSlice",
    "SimulationResult",
    "StoppingPolicy",
]
