"""
Triggers Package.

Azure Functions trigger implementations.

Service Bus Topics (subscription: metadata-processor):
    notification-service -> notificationservice
    video-events         -> metadataprocessor
    encoding-service     -> encodingservice
"""
