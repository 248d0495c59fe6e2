from pydantic import BaseModel


class VideoResponse(BaseModel):
    videoId: str
    title: str
    description: str
    thumbnail: str
    publishedAt: str | None
    viewCount: int
    likeCount: int
    commentCount: int
    duration: str


class ContentCategoryResponse(BaseModel):
    category: str
    count: int
    avgViews: int


class ChannelAnalyticsResponse(BaseModel):
    totalVideos: int
    totalViews: int
    averageViews: int
    totalLikes: int
    totalComments: int
    engagementRate: float
    mostPopularVideo: VideoResponse | None
    leastPopularVideo: VideoResponse | None
    uploadFrequency: str
    averageDuration: int
    viewsGrowthTrend: str
    performanceScore: int
    topPerformingDays: list[str]
    contentCategories: list[ContentCategoryResponse]


class ChannelMetricsResponse(BaseModel):
    subscriberCount: int
    totalChannelViews: int
    videoCount: int
    channelCreatedDate: str | None = None
    country: str | None = None
    customUrl: str | None = None


class ChannelAnalysisItemResponse(BaseModel):
    channelId: str
    channelName: str
    channelUrl: str
    videos: list[VideoResponse]
    analytics: ChannelAnalyticsResponse | None = None
    channelMetrics: ChannelMetricsResponse | None = None
    error: str | None = None


class AnalysisMetadataResponse(BaseModel):
    totalVideos: int
    totalViews: int
    processedAt: str | None
    timeWindow: int
    individualChannelCount: int
    fromCache: bool = False
    analysisType: str


class ChannelAnalysisResponse(BaseModel):
    requestId: str
    status: str
    channels: list[ChannelAnalysisItemResponse]
    metadata: AnalysisMetadataResponse


class ComparativeDatasetResponse(BaseModel):
    channelId: str
    label: str
    data: list[float]
    totalValue: float
    growth: float
    rank: int


class ScatterPointResponse(BaseModel):
    x: float
    y: float
    channelName: str
    channelId: str


class PerformanceDistributionResponse(BaseModel):
    scatterData: list[ScatterPointResponse]
    benchmarks: dict[str, float]


class ChannelComparisonResponse(BaseModel):
    requestId: str
    metric: str
    labels: list[str]
    dates: list[str]
    datasets: list[ComparativeDatasetResponse]
    distribution: PerformanceDistributionResponse
