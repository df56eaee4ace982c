"""Default error thresholds per error model."""

from wmmview.config.schema import ErrorModel, ThresholdTable

DEFAULT_THRESHOLDS: dict[ErrorModel, ThresholdTable] = {
    ErrorModel.MILSPEC: ThresholdTable(
        F=280, H=200, D=1.0, I=1.0, X=140, Y=140, Z=200
    ),
    ErrorModel.WMM: ThresholdTable(
        F=148, H=128, D=0.42, I=0.21, X=131, Y=94, Z=157
    ),
}
