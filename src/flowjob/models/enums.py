from enum import Enum


class TrackQuantity(str, Enum):
    PT = "pt"
    PHI = "phi"
    ETA = "eta"
    CHARGE = "charge"
    TPC_CLUSTERS = "tpc_clusters"
    ITS_CLUSTERS = "its_clusters"
    CHI2_PER_NDF = "chi2_per_ndf"
    DCA_Z = "dca_z"
    DCA_XY = "dca_xy"


# Quantities a weight histogram may be attached to.
KINEMATIC_QUANTITIES = (TrackQuantity.PHI, TrackQuantity.PT, TrackQuantity.ETA)


class EventQuantity(str, Enum):
    CENTRALITY = "centrality"
    MULT_TPC = "mult_tpc"
    MULT_V0 = "mult_v0"
    MULT_SPD = "mult_spd"
    MULT_GLOBAL = "mult_global"
    VERTEX_X = "vertex_x"
    VERTEX_Y = "vertex_y"
    VERTEX_Z = "vertex_z"


class CentralityEstimator(str, Enum):
    V0M = "V0M"
    CL0 = "CL0"
    CL1 = "CL1"
    SPD_TRACKLETS = "SPDTracklets"
    TRK = "TRK"


class VariantKind(str, Enum):
    QVECTOR = "Qvector"
    NESTED_LOOPS = "NestedLoops"
    QVECTOR_WITH_WEIGHTS = "QVectorWithWeights"
    NESTED_LOOPS_WITH_WEIGHTS = "NestedLoopsWithWeights"

    @property
    def nested_loops(self) -> bool:
        return self in (VariantKind.NESTED_LOOPS, VariantKind.NESTED_LOOPS_WITH_WEIGHTS)

    @property
    def with_weights(self) -> bool:
        return self in (VariantKind.QVECTOR_WITH_WEIGHTS, VariantKind.NESTED_LOOPS_WITH_WEIGHTS)

    @classmethod
    def from_flags(cls, nested_loops: bool, with_weights: bool) -> "VariantKind":
        for kind in cls:
            if kind.nested_loops == nested_loops and kind.with_weights == with_weights:
                return kind
        raise ValueError(f"no variant for nested_loops={nested_loops} with_weights={with_weights}")


class RunMode(str, Enum):
    TEST = "test"
    OFFLINE = "offline"
    SUBMIT = "submit"
    FULL = "full"
    MERGE = "merge"
    TERMINATE = "terminate"


class AnalysisMode(str, Enum):
    LOCAL = "local"
    GRID = "grid"


class InputHandler(str, Enum):
    AOD = "AOD"
    ESD = "ESD"
